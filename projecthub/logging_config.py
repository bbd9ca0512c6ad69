# projecthub/logging_config.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    루트 로거를 한 번 설정합니다. 서버 시작, DB 초기화 등 프로세스 진입점에서만 호출합니다.
    알 수 없는 레벨 문자열이 들어오면 INFO로 대체합니다.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    # SQLAlchemy 엔진 로그는 DEBUG일 때만 노출합니다.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if numeric_level <= logging.DEBUG else logging.WARNING
    )
