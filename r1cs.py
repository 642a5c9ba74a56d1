import logging  # constraint-violation diagnostics
from dataclasses import dataclass  # frozen config container

from field import Fr, as_fr  # BN254 scalar field for witness values

logger = logging.getLogger(__name__)


class ConstraintViolation(Exception):  # Raised when the witness does not satisfy a constraint.
    pass

class RangeViolation(ConstraintViolation):  # A value does not fit its asserted bit width.
    pass

class RelationViolation(ConstraintViolation):  # An equality, product or ordering claim is false.
    pass


@dataclass(frozen=True)
class CircuitConfig:  # Evaluation knobs shared by native and constrained backends.
    strict: bool = True  # raise at emission time instead of collecting violations
    enforce_borrow_boolean: bool = True  # constrain borrow hints to {0, 1}


def check_bit_width(bits):  # Range checks only make sense strictly below the modulus width.
    bits = int(bits)
    if not 0 < bits < Fr.MODULUS_BITS:
        raise ValueError(f"bit width must be in (0, {Fr.MODULUS_BITS}), got {bits}")
    return bits


class LC:  # Linear combination Σ coeff_i * z[i] + const over the witness vector z.
    __slots__ = ("terms", "const")

    def __init__(self, terms=None, const=0):  # Accept a {index: coeff} dict or (index, coeff) pairs.
        self.terms = {}
        pairs = terms.items() if isinstance(terms, dict) else (terms or [])
        for idx, coeff in pairs:
            self._accumulate(int(idx), as_fr(coeff))
        self.const = as_fr(const)

    @staticmethod
    def wire(idx, coeff=1):  # Convenience constructor for a single witness term.
        return LC([(idx, coeff)])

    @staticmethod
    def _lift(x):  # LC passthrough; Fr/int become constants; anything else is foreign.
        if isinstance(x, LC):
            return x
        if isinstance(x, (Fr, int)):
            return LC(const=x)
        return None

    def _accumulate(self, idx, coeff):  # Add coeff to z[idx]'s coefficient, dropping zeros.
        c = self.terms.get(idx, Fr.zero()) + coeff
        if c == 0:
            self.terms.pop(idx, None)
        else:
            self.terms[idx] = c

    def is_constant(self):
        return not self.terms

    def dot(self, z):  # Evaluate this LC on witness z.
        out = self.const
        for idx, coeff in self.terms.items():
            out += coeff * z[idx]
        return out

    def __add__(self, other):
        o = LC._lift(other)
        if o is None:
            return NotImplemented
        out = LC(self.terms, self.const + o.const)
        for idx, coeff in o.terms.items():
            out._accumulate(idx, coeff)
        return out

    __radd__ = __add__

    def __neg__(self):
        return LC({idx: -c for idx, c in self.terms.items()}, -self.const)

    def __sub__(self, other):
        o = LC._lift(other)
        return NotImplemented if o is None else self + (-o)

    def __rsub__(self, other):
        o = LC._lift(other)
        return NotImplemented if o is None else o + (-self)

    def __mul__(self, other):  # Scale by a constant; wire * wire goes through ConstraintSystem.mul.
        if isinstance(other, LC):
            if self.is_constant():
                return other * self.const
            if not other.is_constant():
                raise TypeError("LC * LC is not linear; use ConstraintSystem.mul")
            other = other.const
        if not isinstance(other, (Fr, int)):
            return NotImplemented
        k = as_fr(other)
        return LC({idx: c * k for idx, c in self.terms.items()}, self.const * k)

    __rmul__ = __mul__

    def __repr__(self):
        parts = [f"{int(c)}*z[{idx}]" for idx, c in sorted(self.terms.items())]
        if self.const != 0 or not parts:
            parts.append(str(int(self.const)))
        return f"LC({' + '.join(parts)})"


class R1CSConstraint:  # A single rank-1 row proving A(z) * B(z) == C(z).
    def __init__(self, a_lc, b_lc, c_lc, label):
        self.a = a_lc
        self.b = b_lc
        self.c = c_lc
        self.label = str(label)

    def is_satisfied(self, z):
        return self.a.dot(z) * self.b.dot(z) == self.c.dot(z)

    def violation(self):
        return RelationViolation(f"{self.label}: A*B != C")


class RangeConstraint:  # value(z) < 2^bits, delegated to the host range-check primitive.
    def __init__(self, lc, bits, label):
        self.lc = lc
        self.bits = check_bit_width(bits)
        self.label = str(label)

    def is_satisfied(self, z):
        return self.lc.dot(z).num_bits() <= self.bits

    def violation(self):
        return RangeViolation(f"{self.label}: value does not fit in {self.bits} bits")


class ConstraintSystem:  # Witness vector plus the constraints a prover must satisfy.
    """Records constraints over a witness that is filled in as the circuit runs.

    Hints are the propose step: any function (or an adversarial override keyed by
    hint name) may supply values, which are allocated as fresh, unconstrained
    witnesses. Everything else on this class is the verify step. In strict mode a
    violated constraint raises as it is emitted; otherwise violations accumulate in
    ``violations`` and ``verify()`` reports them.
    """

    def __init__(self, config=None, *, hint_overrides=None):
        self.config = config or CircuitConfig()
        self.hint_overrides = dict(hint_overrides or {})
        self.z = []  # witness values
        self.wire_labels = []  # parallel to z
        self.constraints = []  # R1CSConstraint | RangeConstraint, in emission order
        self.violations = []  # collected when config.strict is False

    @property
    def num_wires(self):
        return len(self.z)

    @property
    def num_constraints(self):
        return sum(1 for c in self.constraints if isinstance(c, R1CSConstraint))

    @property
    def num_range_checks(self):
        return sum(1 for c in self.constraints if isinstance(c, RangeConstraint))

    def stats(self):
        return {"wires": self.num_wires, "r1cs": self.num_constraints, "range_checks": self.num_range_checks}

    def alloc(self, value, label="w"):  # Append a witness value; return it as a single-term LC.
        self.z.append(as_fr(value))
        self.wire_labels.append(str(label))
        return LC.wire(len(self.z) - 1)

    def constant(self, value):
        return LC(const=value)

    def coerce(self, x):
        if isinstance(x, LC):
            for idx in x.terms:
                if idx >= len(self.z):
                    raise ValueError(f"LC references unknown wire z[{idx}]")
            return x
        if isinstance(x, (Fr, int)):
            return self.constant(x)
        raise TypeError(f"expected LC, Fr or int, got {type(x).__name__}")

    def value(self, x):  # Evaluate an expression on the current witness.
        return self.coerce(x).dot(self.z)

    def hint(self, name, fn, *args):  # Untrusted computation; outputs become fresh witnesses.
        fn = self.hint_overrides.get(name, fn)
        out = fn(*(self.value(a) for a in args))
        if isinstance(out, tuple):
            return tuple(self.alloc(v, f"{name}[{i}]") for i, v in enumerate(out))
        return self.alloc(out, name)

    def _emit(self, constraint):
        self.constraints.append(constraint)
        if constraint.is_satisfied(self.z):
            return
        err = constraint.violation()
        logger.debug("constraint #%d violated: %s", len(self.constraints) - 1, err)
        if self.config.strict:
            raise err
        self.violations.append(err)

    def enforce(self, a, b, c, label="enforce"):  # A * B == C.
        self._emit(R1CSConstraint(self.coerce(a), self.coerce(b), self.coerce(c), label))

    def assert_equal(self, a, b, label="assert_equal"):
        self.enforce(self.coerce(a) - self.coerce(b), 1, 0, label)

    def assert_max_bit_size(self, x, bits, label="range"):
        self._emit(RangeConstraint(self.coerce(x), bits, label))

    def assert_bool(self, x, label="bool"):  # x * (x - 1) == 0.
        x = self.coerce(x)
        self.enforce(x, x - 1, 0, label)

    def mul(self, a, b, label="mul"):  # Product of two expressions; allocates a wire unless one side is constant.
        a, b = self.coerce(a), self.coerce(b)
        if a.is_constant() or b.is_constant():
            return a * b
        out = self.alloc(a.dot(self.z) * b.dot(self.z), label)
        self.enforce(a, b, out, label)
        return out

    def is_equal(self, a, b, label="is_equal"):  # Boolean LC equal to 1 iff a == b.
        d = self.coerce(a) - self.coerce(b)
        if d.is_constant():
            return self.constant(1 if d.const == 0 else 0)
        inv = self.hint("inverse", lambda v: Fr.zero() if v == 0 else v.inv(), d)
        out = 1 - self.mul(d, inv, f"{label}.d_inv")
        self.enforce(d, out, 0, f"{label}.d_out")
        return out

    def fail(self, label="fail"):  # Unconditionally unsatisfiable: 0 * 0 == 1.
        self.enforce(0, 0, 1, label)

    def verify(self, z=None):  # Re-check every constraint; raise the first violation.
        z = self.z if z is None else [as_fr(v) for v in z]
        if len(z) != len(self.z):
            raise ValueError(f"expected witness of length {len(self.z)}, got {len(z)}")
        for constraint in self.constraints:
            if not constraint.is_satisfied(z):
                raise constraint.violation()
        logger.debug("verified %d constraints over %d wires", len(self.constraints), len(z))

    def is_satisfied(self, z=None):
        try:
            self.verify(z)
        except ConstraintViolation:
            return False
        return True
