import pytest

from parking_planner.core.service import ReservationService
from parking_planner.core.validator import ReservationValidator
from parking_planner.models.inventory import Inventory
from parking_planner.models.member import Member, MemberDirectory, Role
from parking_planner.models.store import InMemoryReservationStore


@pytest.fixture
def inventory():
    return Inventory()


@pytest.fixture
def ana():
    return Member("Ana@UTP.edu.pe", "Ana Torres", Role.STUDENT)


@pytest.fixture
def luis():
    return Member("luis@utp.edu.pe", "Luis Rojas", Role.FACULTY)


@pytest.fixture
def directory(ana, luis):
    return MemberDirectory([ana, luis, Member("jefe@utp.edu.pe", "Jefa", Role.ADMIN)])


@pytest.fixture
def store():
    return InMemoryReservationStore()


@pytest.fixture
def service(store, inventory):
    return ReservationService(store, ReservationValidator(inventory))
