import json, time, uuid, datetime as dt
import logging
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

oplog = logging.getLogger("antiques_trail.oplog")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once: console handler plus optional file handler."""
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        path = Path(logfile).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(formatter)
        root.addHandler(fh)


class LogContext:
    """One admin operation, written as a single structured log line."""

    def __init__(self, action: str, user: str = "admin"):
        self.action = action
        self.user = user
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.before = None
        self.after = None
        self.payload = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid):
        self.entity_type = etype
        self.entity_id = str(eid)

    def set_before(self, obj): self.before = obj
    def set_after(self, obj): self.after = obj
    def set_payload(self, obj): self.payload = obj

    def record(self, result: str = "OK", err: Optional[str] = None) -> dict:
        return {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "user": self.user,
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "request_id": self.request_id,
            "before": self.before,
            "after": self.after,
            "payload": self.payload,
            "result": result,
            "err_msg": err,
            "latency_ms": int((time.perf_counter() - self.start) * 1000),
        }

    def write(self, result: str = "OK", err: Optional[str] = None):
        rec = self.record(result, err)
        line = json.dumps(rec, ensure_ascii=False, default=str)
        if result == "OK":
            oplog.info(line)
        else:
            oplog.error(line)
        return rec
