"""
App layer: HTTP 서버 (FastAPI).

역할:
- 템플릿 목록/도움말/설치/프로젝트 생성 API
- 요청 → ScaffoldService → ServiceResult → HTTP 응답 매핑
- ⚠️ subprocess/workspace 로직 없음 (core에 위임)
"""
