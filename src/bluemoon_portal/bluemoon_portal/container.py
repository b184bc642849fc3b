from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .api.client import ApiClient
from .auth.credentials import CredentialStore, SessionCredentialStore
from .auth.service import AuthService
from .auth.session import AuthSession
from .billing.api_utility_payment_repository import ApiUtilityPaymentRepository
from .billing.service import BillingService
from .core.constants import DEFAULT_API_TIMEOUT, DEFAULT_DASHBOARD_WORKERS
from .dashboard.service import DashboardService
from .fees.api_fee_repository import ApiFeeRepository
from .fees.service import FeeService
from .households.api_household_repository import ApiHouseholdRepository
from .households.service import HouseholdService
from .payments.api_payment_repository import ApiPaymentRepository
from .payments.service import PaymentService
from .persons.api_person_repository import ApiPersonRepository
from .persons.service import PersonService
from .residence.api_residence_repository import ApiTemporaryResidenceRepository
from .residence.service import TemporaryResidenceService
from .statistics.service import StatisticsService
from .users.api_user_repository import ApiUserRepository
from .users.service import UserService
from .utilities.api_utility_repository import ApiUtilityBillRepository
from .utilities.service import UtilityService
from .vehicles.api_vehicle_repository import ApiVehicleRepository
from .vehicles.service import VehicleService


@dataclass(frozen=True)
class Container:
    client: ApiClient
    auth_session: AuthSession

    auth_service: AuthService
    household_service: HouseholdService
    person_service: PersonService
    fee_service: FeeService
    payment_service: PaymentService
    vehicle_service: VehicleService
    utility_service: UtilityService
    residence_service: TemporaryResidenceService
    billing_service: BillingService
    dashboard_service: DashboardService
    statistics_service: StatisticsService
    user_service: UserService


def build_container(
    *,
    api_base_url: str,
    api_timeout: float = DEFAULT_API_TIMEOUT,
    dashboard_workers: int = DEFAULT_DASHBOARD_WORKERS,
    store: Optional[CredentialStore] = None,
    client: Optional[ApiClient] = None,
) -> Container:
    store = store or SessionCredentialStore()
    auth_session = AuthSession(store)

    def token_provider() -> Optional[str]:
        credential = store.load()
        return credential.token if credential else None

    client = client or ApiClient(api_base_url, token_provider=token_provider, timeout=api_timeout)

    households_repo = ApiHouseholdRepository(client)
    persons_repo = ApiPersonRepository(client)
    fees_repo = ApiFeeRepository(client)
    payments_repo = ApiPaymentRepository(client)
    vehicles_repo = ApiVehicleRepository(client)
    bills_repo = ApiUtilityBillRepository(client)
    residence_repo = ApiTemporaryResidenceRepository(client)
    utility_payments_repo = ApiUtilityPaymentRepository(client)
    users_repo = ApiUserRepository(client)

    payment_service = PaymentService(payments_repo, households_repo, fees_repo)

    return Container(
        client=client,
        auth_session=auth_session,
        auth_service=AuthService(client),
        household_service=HouseholdService(households_repo),
        person_service=PersonService(persons_repo),
        fee_service=FeeService(fees_repo),
        payment_service=payment_service,
        vehicle_service=VehicleService(vehicles_repo),
        utility_service=UtilityService(bills_repo),
        residence_service=TemporaryResidenceService(residence_repo),
        billing_service=BillingService(
            utility_payments_repo,
            households=households_repo,
            vehicles=vehicles_repo,
            bills=bills_repo,
        ),
        dashboard_service=DashboardService(
            households=households_repo,
            fees=fees_repo,
            payments=payments_repo,
            persons=persons_repo,
            max_workers=dashboard_workers,
        ),
        statistics_service=StatisticsService(payment_service),
        user_service=UserService(users_repo),
    )
