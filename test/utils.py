"""
Tests for the utils module.

This module verifies:
- Unset sentinel guarantees (singleton, falsy, repr, finality).
- coalesce() preserving falsy values other than Unset.
- rename() in function and decorator forms.
- freeze() and mirror() producing read-only snapshots.
"""
import copy
import unittest
from types import MappingProxyType
from unittest import TestCase

from argview.utils import Unset, UnsetType, coalesce, rename, freeze, mirror


class UnsetTest(TestCase):
    """
    Test suite for the Unset sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(Unset))


class RenameTest(TestCase):
    """
    Test suite for rename().
    """

    def testFunctionForm(self) -> None:
        def f():
            pass
        self.assertIs(rename(f, "work"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("work", "work"))

    def testDecoratorForm(self) -> None:
        @rename("work")
        def f():
            pass
        self.assertEqual(f.__name__, "work")

    def testWrongArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()

    def testNonCallable(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "name")


class FreezeTest(TestCase):
    """
    Test suite for freeze() and mirror().
    """

    def testSequenceBecomesTuple(self) -> None:
        self.assertEqual(freeze(["a", "b"]), ("a", "b"))

    def testStringUntouched(self) -> None:
        self.assertEqual(freeze("abc"), "abc")

    def testMappingBecomesProxy(self) -> None:
        source = {"k": "v"}
        frozen = freeze(source)
        self.assertIsInstance(frozen, MappingProxyType)
        source["k"] = "changed"
        self.assertEqual(frozen["k"], "v")

    def testSetBecomesFrozenset(self) -> None:
        self.assertEqual(freeze({"a"}), frozenset({"a"}))

    def testNoneUntouched(self) -> None:
        self.assertIsNone(freeze(None))

    def testMirrorIsReadOnly(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a"]

        holder = Holder()
        self.assertEqual(holder.items, ("a",))
        with self.assertRaises(AttributeError):
            holder.items = ("b",)

    def testMirrorRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
