"""Error kinds raised by the solver and the psychrometric functions."""

from __future__ import annotations


class InsufficientInputs(ValueError):
    """Fewer than two of the four psychrometric quantities were given."""

    def __init__(self, provided: int, required: int = 2):
        super().__init__(
            f"Please provide at least {required} values (got {provided})"
        )
        self.provided = provided
        self.required = required


class DomainError(ValueError):
    """Input outside the range where the Magnus relations are defined."""


class ConvergenceFailure(RuntimeError):
    """An iterative solver branch ran out of iterations above tolerance."""

    def __init__(
        self, branch: str, estimate: float, residual: float, iterations: int
    ):
        super().__init__(
            f"{branch}: did not converge after {iterations} iterations "
            f"(estimate={estimate:.6g}, residual={residual:.3g})"
        )
        self.branch = branch
        self.estimate = estimate
        self.residual = residual
        self.iterations = iterations


class ConvergenceWarning(RuntimeWarning):
    """Emitted when a best-effort, unconverged estimate is returned."""
