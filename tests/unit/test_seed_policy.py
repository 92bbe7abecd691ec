import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from playguard.application.services.seed_policy import derive_rng, derive_seed


class SeedPolicyTests(unittest.TestCase):
    def test_same_context_same_seed(self) -> None:
        context = {"seed": "guild-night", "player": "p1", "day": "Wed Jan 03 2024"}
        self.assertEqual(derive_seed("faction.roll", context), derive_seed("faction.roll", context))

    def test_context_key_order_does_not_change_seed(self) -> None:
        context_a = {"a": 1, "b": {"x": 2, "y": 3}}
        context_b = {"b": {"y": 3, "x": 2}, "a": 1}
        self.assertEqual(derive_seed("faction.roll", context_a), derive_seed("faction.roll", context_b))

    def test_namespace_changes_seed(self) -> None:
        context = {"value": 10}
        self.assertNotEqual(derive_seed("faction.roll", context), derive_seed("faction.pick", context))

    def test_unordered_set_values_produce_stable_seed(self) -> None:
        context_a = {"factions": {"wild", "crown", "sleep"}}
        context_b = {"factions": {"sleep", "wild", "crown"}}
        self.assertEqual(derive_seed("faction.roll", context_a), derive_seed("faction.roll", context_b))

    def test_seed_fits_in_32_bits(self) -> None:
        seed = derive_seed("faction.roll", {"seed": "x"})
        self.assertGreaterEqual(seed, 0)
        self.assertLess(seed, 2**32)

    def test_non_finite_float_in_context_raises(self) -> None:
        with self.assertRaises(ValueError):
            derive_seed("faction.roll", {"chance": float("nan")})
        with self.assertRaises(ValueError):
            derive_seed("faction.roll", {"nested": [float("inf")]})

    def test_derive_rng_is_deterministic_for_same_context(self) -> None:
        context = {"seed": "abc"}
        rng_a = derive_rng("faction.roll", context)
        rng_b = derive_rng("faction.roll", context)
        self.assertEqual([rng_a.random() for _ in range(5)], [rng_b.random() for _ in range(5)])

    def test_derive_rng_changes_with_namespace(self) -> None:
        context = {"seed": "abc"}
        rng_a = derive_rng("faction.roll", context)
        rng_b = derive_rng("faction.pick", context)
        self.assertNotEqual(rng_a.randint(1, 10**9), rng_b.randint(1, 10**9))


if __name__ == "__main__":
    unittest.main()
