import logging
import sys
from pythonjsonlogger.json import JsonFormatter

# Assessment context a call site may attach with `extra={...}`
CONTEXT_FIELDS = ("session_id", "action", "screen", "question_id")


class QuizJsonFormatter(JsonFormatter):
    """
    One JSON object per record: timestamp, level, logger, module, line, message,
    plus whichever assessment context fields the call site passed via `extra`.
    Context values are rendered as strings so session UUIDs serialize cleanly.
    """
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = record.created
        log_record['level'] = record.levelname
        log_record['module'] = record.module
        log_record['lineno'] = record.lineno

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_record[name] = str(value)


def setup_logging(log_level_str: str = "INFO"):
    """Installs the JSON handler on the root logger once, then just adjusts the level."""
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if any(isinstance(h.formatter, QuizJsonFormatter) for h in root_logger.handlers):
        return

    log_handler = logging.StreamHandler(sys.stdout)
    log_handler.setFormatter(QuizJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s'))
    root_logger.addHandler(log_handler)
    root_logger.info("Structured JSON logging configured", extra={"level_name": logging.getLevelName(log_level)})
