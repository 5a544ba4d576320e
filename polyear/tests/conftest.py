import datetime
import io
import logging
import pathlib

import numpy as np
import pytest

LOG_DIR = pathlib.Path(__file__).parent / "test-logs"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Attach the TestReport to the item so fixtures can see the outcome in teardown.
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def capture_polyear_logs(request):
    """Capture 'polyear' DEBUG logs per test; persist them only when the test fails."""
    pkg = logging.getLogger("polyear")
    prev_level = pkg.level
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    pkg.addHandler(handler)
    pkg.setLevel(logging.DEBUG)
    try:
        yield
    finally:
        pkg.removeHandler(handler)
        pkg.setLevel(prev_level)
        rep = getattr(request.node, "rep_call", None)
        if rep is not None and rep.failed:
            LOG_DIR.mkdir(exist_ok=True)
            nodeid = request.node.nodeid.replace("::", "__").replace("/", "_")
            ts = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
            (LOG_DIR / f"{nodeid}__{ts}.log").write_text(buf.getvalue(), encoding="utf-8")


@pytest.fixture
def square():
    # clockwise in the y-down frame
    return [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]


@pytest.fixture
def arrow():
    # square with a notch pushed in from the top edge; (2, 1) is the only reflex vertex
    return [(0.0, 0.0), (2.0, 1.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]


@pytest.fixture(params=["naive", "optimized"])
def method(request):
    return request.param


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
