import pytest

from lroa.errors import DiagnosticLog


ROUTE = """\
route:              10.0.0.0/24
origin:             AS4242423914
mnt-by:             EXAMPLE-MNT
source:             DN42
"""

ROUTE6 = """\
route6:             fd42:d42:d42::/48
origin:             AS4242420000
max-length:         64
mnt-by:             EXAMPLE-MNT
source:             DN42
"""

BROKEN_ROUTE = """\
route:              172.20.0.0/24
descr:              origin got lost
source:             DN42
"""


@pytest.fixture
def diagnostics():
    return DiagnosticLog()


@pytest.fixture
def registry(tmp_path):
    """A small DN42 style registry checkout."""
    route_dir = tmp_path / "data" / "route"
    route6_dir = tmp_path / "data" / "route6"
    route_dir.mkdir(parents=True)
    route6_dir.mkdir(parents=True)
    (route_dir / "10.0.0.0_24").write_text(ROUTE)
    (route_dir / "172.20.0.0_24").write_text(BROKEN_ROUTE)
    (route_dir / ".gitkeep").write_text("")
    (route6_dir / "fd42:d42:d42::_48").write_text(ROUTE6)
    return tmp_path
