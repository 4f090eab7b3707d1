"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- accounts: MAIN / CURRENT 계좌, 월말 정산
- transfer: 이체 (차입 / 상환 / 인출 / 기여)
- transactions: 수입 / 지출 기록 및 조회
- special: 부채 / 투자 / 저축 목표
"""
