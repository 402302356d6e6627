# tests/core/test_logging_config.py
import json
import logging
import uuid

from quiz_api.core.logging_config import QuizJsonFormatter, setup_logging

FORMAT = '%(timestamp)s %(level)s %(name)s %(message)s'


def make_record(level=logging.INFO, msg="hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("quiz.test", level, __file__, 42, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_core_fields():
    payload = json.loads(QuizJsonFormatter(FORMAT).format(make_record(logging.WARNING)))
    assert payload["level"] == "WARNING"
    assert payload["name"] == "quiz.test"
    assert payload["message"] == "hello"
    assert payload["lineno"] == 42
    assert payload["timestamp"]


def test_formatter_lifts_session_context():
    session_id = uuid.uuid4()
    record = make_record(session_id=session_id, action="next", screen="results", question_id="q2")
    payload = json.loads(QuizJsonFormatter(FORMAT).format(record))
    assert payload["session_id"] == str(session_id)
    assert payload["action"] == "next"
    assert payload["screen"] == "results"
    assert payload["question_id"] == "q2"


def test_formatter_omits_absent_context():
    payload = json.loads(QuizJsonFormatter(FORMAT).format(make_record()))
    assert "session_id" not in payload
    assert "question_id" not in payload


def test_setup_logging_installs_one_handler():
    root_logger = logging.getLogger()
    before = list(root_logger.handlers)
    level = root_logger.level
    try:
        setup_logging("DEBUG")
        setup_logging("WARNING")
        json_handlers = [h for h in root_logger.handlers if isinstance(h.formatter, QuizJsonFormatter)]
        assert len(json_handlers) == 1
        assert root_logger.level == logging.WARNING
    finally:
        root_logger.handlers = before
        root_logger.setLevel(level)
