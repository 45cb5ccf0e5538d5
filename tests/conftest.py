import pytest

from cryptocgt.container import Container


@pytest.fixture()
def container():
    """Wired application container; tests override collaborators on it."""
    c = Container()
    yield c
    c.unwire()
