import logging

import networkx as nx
import numpy as np

from prsampler.logging_utils import ProgressLogger, _safe_repr, debug_log_call


def test_safe_repr_summarizes_large_values():
    assert _safe_repr(np.zeros((100, 2))).startswith("ndarray(shape=(100, 2)")
    assert "min=0" in _safe_repr(np.zeros((100, 2)))
    assert _safe_repr(nx.path_graph(4)) == "Graph(nodes=4, edges=3)"
    assert _safe_repr(np.random.default_rng(0)) == "Generator(PCG64)"
    assert _safe_repr(list(range(20))).endswith("... (20 items)]")
    assert _safe_repr((1, 2)) == "(1, 2)"


def test_debug_log_call_traces_call_and_result(caplog):
    logger = logging.getLogger("prsampler.tests.trace")

    @debug_log_call(logger, name="scale")
    def scale(x, factor=2):
        return factor * x

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        assert scale(21, factor=3) == 63

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "Call scale(21, factor=3)"
    assert messages[1].startswith("scale returned 63 in ")


def test_debug_log_call_is_silent_above_debug(caplog):
    logger = logging.getLogger("prsampler.tests.quiet")

    @debug_log_call(logger)
    def identity(x):
        return x

    with caplog.at_level(logging.INFO, logger=logger.name):
        assert identity(np.ones(3)) is not None

    assert caplog.records == []


def test_debug_log_call_logs_exceptions(caplog):
    logger = logging.getLogger("prsampler.tests.failure")

    @debug_log_call(logger)
    def fail():
        raise RuntimeError("boom")

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        try:
            fail()
        except RuntimeError:
            pass

    assert any("failed after" in record.getMessage() for record in caplog.records)


def test_progress_logger_emits_every_interval(caplog):
    logger = logging.getLogger("prsampler.tests.progress")
    progress = ProgressLogger(logger, "loop", interval=3)

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        for _ in range(7):
            progress.tick(left=5)

    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["loop: 3 rounds (left=5)", "loop: 6 rounds (left=5)"]
