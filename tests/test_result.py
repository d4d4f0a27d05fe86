from __future__ import annotations

import json
import logging

import pytest

from ef_mapping.domain.result import Err, Ok
from ef_mapping.logging_utils import log_event


def test_ok_and_err_flags() -> None:
    assert Ok(1).is_ok() and not Ok(1).is_err()
    assert Err("no").is_err() and not Err("no").is_ok()
    assert Ok([1, 2]).unwrap() == [1, 2]


def test_err_unwrap_raises_with_message() -> None:
    with pytest.raises(ValueError, match="boom"):
        Err("boom").unwrap()


def test_results_are_frozen() -> None:
    with pytest.raises((AttributeError, TypeError)):
        Ok(1).value = 2  # type: ignore[misc]


def test_log_event_emits_compact_json(caplog) -> None:
    logger = logging.getLogger("ef_mapping.tests")

    with caplog.at_level(logging.INFO, logger="ef_mapping.tests"):
        log_event(logger, logging.INFO, "row_processed", row=1, region=None)

    assert json.loads(caplog.records[0].getMessage()) == {
        "event": "row_processed",
        "region": None,
        "row": 1,
    }
