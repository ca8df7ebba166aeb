"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from filmpass.service.booking.driving_adapter.http_controller import payment_return_controller


WIRE_MODULES: list[ModuleType] = [
    payment_return_controller,
]
