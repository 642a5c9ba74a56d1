import random
import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from field import Fr, as_fr, field_less_than


class FieldTests(unittest.TestCase):
    def test_arithmetic_matches_integers(self):
        p = Fr.MODULUS
        rng = random.Random(0)
        for _ in range(64):
            a = rng.randrange(0, p)
            b = rng.randrange(1, p)
            x, y = Fr(a), Fr(b)
            self.assertEqual(int(x + y), (a + b) % p)
            self.assertEqual(int(x - y), (a - b) % p)
            self.assertEqual(int(x * y), (a * b) % p)
            self.assertEqual(int(x / y), (a * pow(b, -1, p)) % p)
            self.assertEqual(int(x**7), pow(a, 7, p))
            self.assertEqual(Fr.from_montgomery(x.v), x)
            if a:
                self.assertEqual(int(x * x.inv()), 1)
            else:
                with self.assertRaises(ZeroDivisionError):
                    x.inv()

        self.assertEqual(int(Fr.zero()), 0)
        self.assertEqual(int(Fr.one()), 1)

    def test_reflected_int_operators(self):
        self.assertEqual(1 - Fr(3), Fr(-2))
        self.assertEqual(2 + Fr(3), 5)
        self.assertEqual(4 * Fr(3), 12)
        self.assertEqual(Fr(-1), Fr.MODULUS - 1)

    def test_truncate(self):
        x = Fr((0xAB << 64) | 0x1122334455667788)
        self.assertEqual(x.truncate(64), 0x1122334455667788)
        self.assertEqual(x.truncate(8), 0x88)
        self.assertEqual(Fr(-1).truncate(64), (Fr.MODULUS - 1) & ((1 << 64) - 1))

    def test_le_bytes(self):
        x = Fr(0x0102)
        self.assertEqual(x.to_le_bytes()[:3], b"\x02\x01\x00")
        self.assertEqual(len(x.to_le_bytes()), 32)
        self.assertEqual(Fr.from_le_bytes(x.to_le_bytes()), x)
        mod = Fr.modulus_le_bytes()
        self.assertEqual(int.from_bytes(mod, "little"), Fr.MODULUS)
        self.assertEqual(Fr.from_le_bytes(mod), 0)

    def test_num_bits(self):
        self.assertEqual(Fr(0).num_bits(), 0)
        self.assertEqual(Fr(1 << 128).num_bits(), 129)
        self.assertEqual(Fr(-1).num_bits(), Fr.MODULUS_BITS)

    def test_field_less_than_uses_canonical_representatives(self):
        self.assertTrue(field_less_than(0, 1))
        self.assertFalse(field_less_than(1, 1))
        self.assertTrue(field_less_than(Fr(-2), Fr(-1)))
        self.assertFalse(field_less_than(Fr(-1), 5))
        self.assertEqual(as_fr(True), Fr.one())


if __name__ == "__main__":
    unittest.main()
