# tests/test_core/test_logging.py

import json
import logging

from loguru import logger

from seriesgate.core import logger as log_setup


def _capture():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    return records, sink_id


def test_stdlib_seriesgate_logs_are_intercepted():
    records, sink_id = _capture()
    try:
        logging.getLogger("seriesgate.auth").warning("token %s rejected", "abc")
    finally:
        logger.remove(sink_id)
    assert any(r["message"] == "token abc rejected" for r in records)


def test_request_id_is_bound_in_context():
    records, sink_id = _capture()
    try:
        with logger.contextualize(request_id="rid-1"):
            logger.warning("inside")
        logger.warning("outside")
    finally:
        logger.remove(sink_id)
    by_message = {r["message"]: r["extra"].get("request_id") for r in records}
    assert by_message == {"inside": "rid-1", "outside": "N/A"}


def test_json_serializer_includes_extra_fields():
    lines = []
    sink_id = logger.add(lambda m: lines.append(log_setup._serialize(m.record)), level="DEBUG")
    try:
        logger.bind(series_id=7).warning("series view")
    finally:
        logger.remove(sink_id)
    payload = json.loads(lines[-1])
    assert payload["message"] == "series view"
    assert payload["series_id"] == 7
    assert payload["level"] == "WARNING"
    assert payload["request_id"] == "N/A"
