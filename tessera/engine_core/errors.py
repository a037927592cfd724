"""
Engine errors.

Invalid moves are not exceptions: the reducer reports them as events.
The only exception the engine raises on its own is InvariantViolation,
which signals a defect in the engine rather than a bad request.
"""


class InvariantViolation(AssertionError):
    """A state invariant (tile conservation, permanent wall cells) was broken."""
