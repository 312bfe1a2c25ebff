"""Test factories for generating test data."""

from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory

from ui_flake_harness.config import PacingConfig
from ui_flake_harness.models.outcome import Failure
from ui_flake_harness.models.result import FailureRecord


class FailureFactory(DataclassFactory[Failure]):
    """Factory for Failure."""

    __model__ = Failure

    error_type = None


class FailureRecordFactory(DataclassFactory[FailureRecord]):
    """Factory for FailureRecord."""

    __model__ = FailureRecord


class PacingConfigFactory(ModelFactory[PacingConfig]):
    """Factory for PacingConfig with every pause disabled."""

    __model__ = PacingConfig

    load_settle = 0.0
    reset_settle = 0.0
    iteration_pause = 0.0
    click_settle = 0.0
    type_settle = 0.0
    submit_settle = 0.0
    navigation_settle = 0.0
    live_click_settle = 0.0
    live_type_settle = 0.0
    live_cancel_settle = 0.0
