import logging

import pytest

from conftest import FakeDriver
from page_factory import instrumentation
from page_factory.instrumentation import (
    Cat,
    InstrumentPolicy,
    LogMode,
    emit_diag,
    emit_signal,
    emit_trace,
    format_ctx,
    set_policy,
    setup_logging,
)
from page_factory.page_factory import PageFactory
from page_factory.timing import phase_timer


@pytest.fixture
def policy():
    def _use(mode):
        set_policy(InstrumentPolicy(mode=mode))

    previous = instrumentation.get_policy()
    yield _use
    set_policy(previous)


@pytest.fixture
def pf_logs(caplog):
    caplog.set_level(logging.DEBUG, logger=instrumentation.LOGGER_NAME)
    return caplog


def test_format_ctx_orders_known_keys_first():
    assert format_ctx(zeta=1, name="title", page="Home", skipped=None, alpha="x") == (
        "page=Home name=title alpha=x zeta=1"
    )


def test_signal_levels(pf_logs):
    emit_signal(Cat.LIFECYCLE, "hello", level="warn", page="Home")
    emit_signal(Cat.LIFECYCLE, "boom", level=logging.ERROR)
    records = [(r.levelno, r.getMessage()) for r in pf_logs.records]
    assert records == [
        (logging.WARNING, "[LIFECYCLE] hello :: page=Home"),
        (logging.ERROR, "[LIFECYCLE] boom"),
    ]


def test_diag_and_trace_are_gated_by_mode(pf_logs, policy):
    policy(LogMode.LIVE)
    emit_diag(Cat.DEFINE, "hidden")
    policy(LogMode.DEBUG)
    emit_diag(Cat.DEFINE, "diag shown")
    emit_trace(Cat.DISPATCH, "trace hidden")
    policy(LogMode.TRACE)
    emit_trace(Cat.DISPATCH, "trace shown")
    messages = [r.getMessage() for r in pf_logs.records]
    assert messages == ["[DEFINE] diag shown", "[DISPATCH] trace shown"]


def test_forwarded_calls_are_traced(pf_logs, policy):
    policy(LogMode.TRACE)
    driver = FakeDriver()
    driver.refresh = lambda: "refreshed"

    class Page(PageFactory):
        pass

    assert Page(driver).refresh() == "refreshed"
    assert any("forwarding to browser" in r.getMessage() and "name=refresh" in r.getMessage()
               for r in pf_logs.records)


def test_phase_timer_logs_start_and_end(pf_logs):
    with phase_timer("load", ctx={"page": "Home"}):
        pass
    messages = [r.getMessage() for r in pf_logs.records]
    assert messages[0].startswith("[LIFECYCLE] START phase: load :: page=Home a=load")
    assert messages[1].startswith("[LIFECYCLE] END phase: load (")
    assert pf_logs.records[1].levelno == logging.DEBUG


def test_phase_timer_warns_when_slow(pf_logs):
    with phase_timer("load", slow_s=0):
        pass
    assert pf_logs.records[-1].levelno == logging.WARNING
    assert "slow" in pf_logs.records[-1].getMessage()


def test_phase_timer_logs_failure_and_reraises(pf_logs):
    with pytest.raises(KeyError):
        with phase_timer("load"):
            raise KeyError("x")
    last = pf_logs.records[-1]
    assert last.levelno == logging.WARNING
    assert "END phase: load (failed after" in last.getMessage()
    assert "failed=True" in last.getMessage()


def test_setup_logging_file_handler(tmp_path):
    logger = logging.getLogger(instrumentation.LOGGER_NAME)
    saved = (list(logger.handlers), logger.propagate, logger.level)
    try:
        log_file = tmp_path / "run.log"
        setup_logging(log_file=str(log_file))
        assert logger.propagate is False
        assert [h.name for h in logger.handlers if isinstance(h, logging.FileHandler)] == ["default_file"]
        emit_signal(Cat.STARTUP, "written to file")
        for h in logger.handlers:
            h.flush()
        assert "[STARTUP] written to file" in log_file.read_text(encoding="utf-8")
    finally:
        for h in logger.handlers:
            h.close()
        logger.handlers[:] = saved[0]
        logger.propagate = saved[1]
        logger.setLevel(saved[2])
