"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from filmpass.platform.config.core_setting import Settings
from filmpass.service.booking.app.command.checkout_payment_bridge import CheckoutPaymentBridge
from filmpass.service.booking.app.command.create_count_booking_use_case import (
    CreateCountBookingUseCase,
)
from filmpass.service.booking.app.command.selection_state_machine import (
    SeatSelectionStateMachine,
)
from filmpass.service.booking.app.query.load_seat_map_use_case import LoadSeatMapUseCase
from filmpass.service.booking.driven_adapter.api.backend_api_client import BackendApiClient
from filmpass.service.catalog.app.query.list_catalog_use_case import ListCatalogUseCase
from filmpass.service.identity.app.command.auth_use_case import AuthUseCase
from filmpass.service.identity.driven_adapter.session_store import FileSessionStore


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Identity (token + user profile survive restarts)
    session_store = providers.Singleton(
        FileSessionStore, path=config_service.provided.SESSION_STATE_FILE
    )

    # One HTTP client for every backend context
    backend_api_client = providers.Singleton(
        BackendApiClient,
        base_url=config_service.provided.API_BASE_URL,
        timeout=config_service.provided.API_TIMEOUT_SECONDS,
        session_store=session_store,
    )

    # Use cases (stateless - Singleton)
    load_seat_map_use_case = providers.Singleton(
        LoadSeatMapUseCase, booking_gateway=backend_api_client
    )
    checkout_payment_bridge = providers.Singleton(
        CheckoutPaymentBridge,
        booking_gateway=backend_api_client,
        success_url=config_service.provided.PAYMENT_SUCCESS_URL,
        cancel_url=config_service.provided.PAYMENT_CANCEL_URL,
    )
    create_count_booking_use_case = providers.Singleton(
        CreateCountBookingUseCase,
        booking_gateway=backend_api_client,
        session_store=session_store,
        payment_bridge=checkout_payment_bridge,
    )
    list_catalog_use_case = providers.Singleton(
        ListCatalogUseCase, catalog_gateway=backend_api_client
    )
    auth_use_case = providers.Singleton(
        AuthUseCase, auth_gateway=backend_api_client, session_store=session_store
    )

    # One state machine per booking attempt (stateful - Factory)
    selection_state_machine = providers.Factory(
        SeatSelectionStateMachine,
        seat_map_loader=load_seat_map_use_case,
        booking_gateway=backend_api_client,
        session_store=session_store,
        payment_bridge=checkout_payment_bridge,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
