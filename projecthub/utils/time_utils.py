from datetime import datetime, timezone


def utcnow() -> datetime:
    """DB에 저장하는 모든 시각은 tzinfo 없는 UTC 기준입니다."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
