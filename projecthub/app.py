# projecthub/app.py
from wsgiref.simple_server import make_server
from datetime import timedelta
import json
import logging
import re

from argon2 import PasswordHasher
from sqlalchemy import text

from projecthub.config import Settings, settings
from projecthub.database.database import SessionLocal
from projecthub.repositories.sqlalchemy import (
    SqlalchemyAccountRepository, SqlalchemySessionRepository, SqlalchemyProjectRepository
)
from projecthub.repositories.sqlalchemy.errors import translate_db_errors
from projecthub.services.authorization_guard import AuthorizationGuard, SESSION_COOKIE_NAME
from projecthub.services.credential_service import CredentialService
from projecthub.services.exceptions import ErrorKind, ServiceError, ValidationError
from projecthub.services.project_service import ProjectService
from projecthub.services.session_service import SessionService
from projecthub.utils.password import DEFAULT_HASHER

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
## 오류 매핑 (ErrorKind -> HTTP 상태)
# --------------------------------------------------------------------------

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: "400 Bad Request",
    ErrorKind.DUPLICATE_EMAIL: "409 Conflict",
    ErrorKind.INVALID_CREDENTIALS: "401 Unauthorized",
    ErrorKind.UNAUTHENTICATED: "401 Unauthorized",
    ErrorKind.NOT_FOUND: "404 Not Found",
    # 다른 계정 리소스의 존재 여부를 드러내지 않도록 404로 통일합니다.
    ErrorKind.FORBIDDEN: "404 Not Found",
    ErrorKind.DATABASE: "500 Internal Server Error",
    ErrorKind.INTERNAL: "500 Internal Server Error",
}

GENERIC_SERVER_ERROR = "Internal server error."


def handle_exception(e):
    """예외를 (status, body)로 변환하는 유일한 경계 지점입니다."""
    if not isinstance(e, ServiceError):
        logger.exception("Unhandled error while processing request")
        return STATUS_BY_KIND[ErrorKind.INTERNAL], json.dumps({"error": GENERIC_SERVER_ERROR})

    status = STATUS_BY_KIND[e.kind]
    if e.kind is ErrorKind.DATABASE:
        # 상세 내용은 저장소 계층에서 이미 로그로 남겼습니다.
        return status, json.dumps({"error": GENERIC_SERVER_ERROR})
    if e.kind is ErrorKind.INTERNAL:
        logger.error("Internal invariant violated: %s", e.message, exc_info=e)
        return status, json.dumps({"error": GENERIC_SERVER_ERROR})

    body = {"error": e.message}
    if e.kind is ErrorKind.VALIDATION and e.field:
        body["field"] = e.field
    return status, json.dumps(body)

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        data = json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValidationError("Invalid or missing JSON body.")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def require_string_fields(data, *names):
    """본문에 문자열 필드가 없으면 해당 필드 이름과 함께 ValidationError를 발생시킵니다."""
    for name in names:
        if not isinstance(data.get(name), str) or not data[name]:
            raise ValidationError(f"'{name}' is required.", field=name)
    return [data[name] for name in names]


def session_cookie_header(token, max_age, secure):
    parts = [f"{SESSION_COOKIE_NAME}={token}", "HttpOnly", "SameSite=Lax", "Path=/", f"Max-Age={max_age}"]
    if secure:
        parts.insert(2, "Secure")
    return ("Set-Cookie", "; ".join(parts))

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def create_app(session_factory=SessionLocal, app_settings: Settings = settings, hasher: PasswordHasher = DEFAULT_HASHER):
    """
    WSGI 애플리케이션을 생성합니다.

    요청마다 풀에서 DB 세션을 하나 꺼내 리포지토리와 서비스를 구성하고, 응답 후 반납합니다.
    요청 사이에 공유되는 가변 상태는 없습니다.
    """
    session_ttl = timedelta(hours=app_settings.session_ttl_hours)

    routes = [
        ('GET', r'^/healthz$', health_handler),
        ('POST', r'^/signup$', signup_handler),
        ('POST', r'^/login$', login_handler),
        ('POST', r'^/logout$', logout_handler),
        ('POST', r'^/projects$', create_project_handler),
        ('GET', r'^/projects$', list_projects_handler),
        ('GET', r'^/projects/([A-Za-z0-9-]+)$', get_project_handler),
        ('PUT', r'^/projects/([A-Za-z0-9-]+)$', update_project_handler),
        ('DELETE', r'^/projects/([A-Za-z0-9-]+)$', delete_project_handler),
    ]

    def application(environ, start_response):
        db_session = session_factory()
        headers = [("Content-Type", "application/json")]
        try:
            # 1. 의존성 생성 (Repositories -> Services)
            session_service = SessionService(SqlalchemySessionRepository(db_session), ttl=session_ttl)
            environ['db'] = db_session
            environ['settings'] = app_settings
            environ['services'] = {
                'credentials': CredentialService(SqlalchemyAccountRepository(db_session), hasher=hasher),
                'sessions': session_service,
                'guard': AuthorizationGuard(session_service),
                'projects': ProjectService(SqlalchemyProjectRepository(db_session)),
            }

            # 2. 라우팅 및 핸들러 실행
            path = environ.get("PATH_INFO", "")
            method = environ.get("REQUEST_METHOD", "")

            handler, path_args = None, []
            for route_method, pattern, route_handler in routes:
                if method == route_method and (match := re.match(pattern, path)):
                    handler, path_args = route_handler, match.groups()
                    break

            if handler:
                status, response_body, *extra_headers = handler(environ, *path_args)
                for extra in extra_headers:
                    headers.extend(extra)
            else:
                status, response_body = '404 Not Found', json.dumps({'error': 'Not Found'})

        except Exception as e:
            status, response_body = handle_exception(e)
        finally:
            db_session.close()

        start_response(status, headers)
        return [response_body.encode("utf-8")]

    return application

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

def authorize(environ):
    """세션 쿠키를 검증하여 AuthContext를 반환합니다. 실패하면 리소스 서비스에 도달하지 않습니다."""
    return environ['services']['guard'].authorize_request(environ)


def health_handler(environ, *args):
    db = environ['db']
    with translate_db_errors(db, "running health check"):
        db.execute(text("SELECT 1"))
    return '200 OK', json.dumps({"status": "ok"})


def signup_handler(environ, *args):
    data = get_request_data(environ)
    account_id = environ['services']['credentials'].signup(data.get('email'), data.get('password'))
    return '201 Created', json.dumps({"id": account_id})


def login_handler(environ, *args):
    email, password = require_string_fields(get_request_data(environ), 'email', 'password')
    account_id = environ['services']['credentials'].login(email, password)
    token, expires_at = environ['services']['sessions'].create(account_id)
    app_settings = environ['settings']
    cookie = session_cookie_header(
        token, app_settings.session_ttl_hours * 3600, app_settings.session_cookie_secure
    )
    body = json.dumps({"account_id": account_id, "expires_at": expires_at.isoformat()})
    return '200 OK', body, [cookie]


def logout_handler(environ, *args):
    context = authorize(environ)
    environ['services']['sessions'].revoke(context.token)
    cookie = session_cookie_header("", 0, environ['settings'].session_cookie_secure)
    return '204 No Content', '', [cookie]


def create_project_handler(environ, *args):
    context = authorize(environ)
    data = get_request_data(environ)
    project = environ['services']['projects'].create(
        context.account_id, data.get('name'), data.get('description')
    )
    return '201 Created', json.dumps(project)


def list_projects_handler(environ, *args):
    context = authorize(environ)
    projects = environ['services']['projects'].list(context.account_id)
    return '200 OK', json.dumps({"projects": projects})


def get_project_handler(environ, project_id):
    context = authorize(environ)
    project = environ['services']['projects'].get(context.account_id, project_id)
    return '200 OK', json.dumps(project)


def update_project_handler(environ, project_id):
    context = authorize(environ)
    data = get_request_data(environ)
    project = environ['services']['projects'].update(context.account_id, project_id, data)
    return '200 OK', json.dumps(project)


def delete_project_handler(environ, project_id):
    context = authorize(environ)
    environ['services']['projects'].delete(context.account_id, project_id)
    return '204 No Content', ''


application = create_app()

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

if __name__ == "__main__":
    from projecthub.database.db_init import initialize_db
    from projecthub.logging_config import configure_logging

    configure_logging(settings.log_level)
    initialize_db()
    try:
        with make_server("", settings.port, application) as httpd:
            logger.info("Serving projecthub on port %d...", settings.port)
            httpd.serve_forever()
    except Exception:
        logger.exception("Error starting server")
