import pytest
from protean.integrations.pytest import DomainFixture

from payments.gateway import reset_gateway


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed, monkeypatch):
    monkeypatch.delenv("NTH_ORDER_COUNT", raising=False)
    reset_gateway()

    with ordering_bed.domain_context():
        yield

    reset_gateway()
