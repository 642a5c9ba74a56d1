"""Total order on BN254 Fr elements.

Every comparison reduces to one primitive, ``assert_gt_limbs``, applied to the
canonical 128/128-bit limb decompositions of its operands. In native mode the
answers come straight from the integer comparator; under ``constrained(cs)`` every
hint the prover supplies is checked by range and R1CS constraints in ``cs``.
"""

from field import Fr, as_fr, field_less_than  # BN254 scalar field + native comparator
from execution_mode import current_backend, is_unconstrained  # native vs constrained dispatch
from r1cs import RangeViolation, RelationViolation  # failure kinds

LIMB_BITS = 128  # Width of each half of the 256-bit split.
TWO_POW_64 = Fr(1 << 64)
TWO_POW_128 = Fr(1 << LIMB_BITS)

PLO = Fr(Fr.MODULUS & ((1 << LIMB_BITS) - 1))  # Low limb of the modulus.
PHI = Fr(Fr.MODULUS >> LIMB_BITS)  # High limb of the modulus.


def compute_decomposition(x):  # (x mod 2^128, x // 2^128) using 64-bit truncation and exact division.
    x = as_fr(x)
    low_lower_64 = x.truncate(64)
    x = (x - low_lower_64) / TWO_POW_64
    low_upper_64 = x.truncate(64)
    high = (x - low_upper_64) / TWO_POW_64
    low = low_upper_64 * TWO_POW_64 + low_lower_64
    return low, high


def lte_hint(x, y):  # Borrow hint: 1 iff x <= y as integers.
    return x == y or field_less_than(x, y)


def _less_than_hint(backend, a, b):  # Prover's claim that a < b; never trusted on its own.
    return backend.value(backend.hint("less_than", field_less_than, a, b)) == 1


def assert_gt_limbs(a, b, label="gt_limbs"):
    """Prove ``a > b`` for canonical limb pairs ``a = (alo, ahi)``, ``b = (blo, bhi)``.

    With ``borrow = [alo <= blo]`` both ``alo - blo - 1 + borrow * 2^128`` and
    ``ahi - bhi - borrow`` fit in 128 bits exactly when ``a > b``: ``borrow = 0``
    covers a strictly larger low limb with ``ahi >= bhi``, ``borrow = 1`` a strictly
    larger high limb. For ``a <= b`` no boolean borrow passes both range checks.
    """
    backend = current_backend()
    alo, ahi = (backend.coerce(v) for v in a)
    blo, bhi = (backend.coerce(v) for v in b)

    borrow = backend.hint("borrow", lte_hint, alo, blo)
    if backend.config.enforce_borrow_boolean:
        backend.assert_bool(borrow, f"{label}.borrow")

    rlo = alo - blo - 1 + borrow * TWO_POW_128
    rhi = ahi - bhi - borrow
    try:
        backend.assert_max_bit_size(rlo, LIMB_BITS, f"{label}.rlo")
        backend.assert_max_bit_size(rhi, LIMB_BITS, f"{label}.rhi")
    except RangeViolation as exc:
        raise RelationViolation(f"{label}: left limb pair is not greater than right") from exc


def decompose(x):  # Canonical (lo, hi) with x == lo + hi * 2^128 over the integers.
    backend = current_backend()
    if is_unconstrained():
        return compute_decomposition(backend.coerce(x))

    x = backend.coerce(x)
    lo, hi = backend.hint("decompose", compute_decomposition, x)
    backend.assert_max_bit_size(lo, LIMB_BITS, "decompose.lo")
    backend.assert_max_bit_size(hi, LIMB_BITS, "decompose.hi")
    backend.assert_equal(x, lo + hi * TWO_POW_128, "decompose.recompose")
    # (lo, hi) read as a 256-bit integer must sit below the modulus, else it may be x + kP.
    assert_gt_limbs((PLO, PHI), (lo, hi), label="decompose.canonical")
    return lo, hi


def assert_gt(a, b):
    backend = current_backend()
    if is_unconstrained():
        if not field_less_than(backend.coerce(b), backend.coerce(a)):
            raise RelationViolation("assert_gt: left operand is not greater than right")
        return
    assert_gt_limbs(decompose(a), decompose(b), label="assert_gt")


def assert_lt(a, b):
    assert_gt(b, a)


def eq(a, b):
    backend = current_backend()
    if is_unconstrained():
        return backend.coerce(a) == backend.coerce(b)
    return backend.value(backend.is_equal(a, b, "eq")) == 1


def gt(a, b):
    backend = current_backend()
    if is_unconstrained():
        return field_less_than(backend.coerce(b), backend.coerce(a))
    if eq(a, b):
        return False
    if _less_than_hint(backend, a, b):
        assert_gt(b, a)
        return False
    assert_gt(a, b)
    return True


def lt(a, b):
    return gt(b, a)


def lte(a, b):
    backend = current_backend()
    if is_unconstrained():
        return not field_less_than(backend.coerce(b), backend.coerce(a))
    if eq(a, b):
        return True
    if _less_than_hint(backend, a, b):
        assert_gt(b, a)
        return True
    assert_gt(a, b)
    return False


def gte(a, b):
    return lte(b, a)


def assert_lte(a, b):
    backend = current_backend()
    if is_unconstrained():
        if field_less_than(backend.coerce(b), backend.coerce(a)):
            raise RelationViolation("assert_lte: left operand is greater than right")
        return
    if eq(a, b):
        return
    if _less_than_hint(backend, a, b):
        assert_gt(b, a)
    else:
        backend.fail("assert_lte: left operand is greater than right")


def assert_gte(a, b):
    assert_lte(b, a)
