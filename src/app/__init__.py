"""
App layer: UI 서버 (FastAPI + HTMX).

역할:
- 페이지 렌더링 (대시보드, 스캐너, 위협 피드)
- flow 실행, provider 호출
- 실패는 sentinel 결과 또는 일반 메시지 배너로 변환

주의: 폴더 구분
- src/app/templates/ → Jinja2 HTML (HTMX)
- src/app/flows/ → 프롬프트 + 스키마 (모델 호출 단위)
"""
