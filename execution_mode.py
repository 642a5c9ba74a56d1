from contextlib import contextmanager  # scoped mode switches
from contextvars import ContextVar  # per-thread / per-task active backend

from field import Fr, as_fr  # BN254 scalar field for native values
from r1cs import LC, CircuitConfig, ConstraintSystem, RangeViolation, RelationViolation, check_bit_width

_ACTIVE = ContextVar("field_order_active_system", default=None)  # None means native evaluation.


class NativeBackend:  # Direct evaluation on concrete Fr values; hints are trusted, checks raise at once.
    config = CircuitConfig()

    def coerce(self, x):
        if isinstance(x, LC):
            raise TypeError("witness expression used outside a constrained evaluation")
        return as_fr(x)

    def value(self, x):
        return self.coerce(x)

    def hint(self, name, fn, *args):  # Same surface as ConstraintSystem.hint; overrides do not apply natively.
        out = fn(*(self.coerce(a) for a in args))
        return tuple(as_fr(v) for v in out) if isinstance(out, tuple) else as_fr(out)

    def assert_max_bit_size(self, x, bits, label="range"):
        bits = check_bit_width(bits)
        if self.coerce(x).num_bits() > bits:
            raise RangeViolation(f"{label}: value does not fit in {bits} bits")

    def assert_equal(self, a, b, label="assert_equal"):
        if self.coerce(a) != self.coerce(b):
            raise RelationViolation(f"{label}: values differ")

    def assert_bool(self, x, label="bool"):
        if self.coerce(x) not in (Fr.zero(), Fr.one()):
            raise RelationViolation(f"{label}: value is not boolean")

    def mul(self, a, b, label="mul"):
        return self.coerce(a) * self.coerce(b)

    def is_equal(self, a, b, label="is_equal"):
        return Fr.one() if self.coerce(a) == self.coerce(b) else Fr.zero()

    def fail(self, label="fail"):
        raise RelationViolation(f"{label}: unsatisfiable")


NATIVE = NativeBackend()  # Shared stateless native backend.


def is_unconstrained():  # True when no ConstraintSystem is active.
    return _ACTIVE.get() is None

def current_backend():  # Active ConstraintSystem, or the native backend.
    cs = _ACTIVE.get()
    return NATIVE if cs is None else cs

@contextmanager
def constrained(cs=None):  # Run the block against `cs` (a fresh ConstraintSystem by default).
    cs = ConstraintSystem() if cs is None else cs
    token = _ACTIVE.set(cs)
    try:
        yield cs
    finally:
        _ACTIVE.reset(token)

@contextmanager
def unconstrained():  # Run the block natively, even inside a constrained evaluation.
    token = _ACTIVE.set(None)
    try:
        yield NATIVE
    finally:
        _ACTIVE.reset(token)
