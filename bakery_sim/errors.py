"""Exceptions shared by the simulation core and its collaborators."""

from __future__ import annotations


class BakeryError(Exception):
    """Base class for every error raised by bakery_sim."""


class DuplicateCustomerError(BakeryError):
    """Two arrival records carry the same customer id."""

    def __init__(self, customer_id: int) -> None:
        super().__init__(f"duplicate customer id {customer_id}")
        self.customer_id = customer_id


class UnknownCustomerError(BakeryError):
    """A dequeued customer id has no completion-signal slot.

    This is a consistency violation (the batch was built wrong), never an
    expected runtime condition, so it aborts the run.
    """

    def __init__(self, customer_id: int) -> None:
        super().__init__(f"no signal slot for customer {customer_id}")
        self.customer_id = customer_id


class SignalError(BakeryError):
    """A one-shot completion signal was posted or waited on twice."""


class CapacityError(BakeryError):
    """A capacity pool was released more often than it was acquired."""


class RegisterError(BakeryError):
    """The cash register was taken while held, or freed by someone else."""


class RunAborted(BakeryError):
    """A chef or customer thread failed and the run was stopped."""
