import unittest

from resultmanager.core.entities import Section
from resultmanager.state.app_state import AppState, Collection


class AppStateTests(unittest.TestCase):
    def setUp(self):
        self.state = AppState(sections=[Section(id=1, name="A"), Section(id=2, name="B"), Section(id=3, name="C")])

    def test_replace_is_order_preserving(self):
        self.assertTrue(self.state.replace(Collection.SECTIONS, Section(id=2, name="B2")))
        self.assertEqual([s.name for s in self.state.sections], ["A", "B2", "C"])

    def test_replace_unknown_id_is_noop(self):
        self.assertFalse(self.state.replace(Collection.SECTIONS, Section(id=9, name="Z")))
        self.assertEqual(len(self.state.sections), 3)

    def test_upsert_never_duplicates(self):
        self.state.upsert(Collection.SECTIONS, Section(id="3", name="C2"))
        self.state.upsert(Collection.SECTIONS, Section(id=4, name="D"))
        self.assertEqual([s.name for s in self.state.sections], ["A", "B", "C2", "D"])

    def test_remove_drops_one(self):
        self.state.remove(Collection.SECTIONS, 1)
        self.assertEqual([s.id for s in self.state.sections], [2, 3])

    def test_defaults(self):
        state = AppState()
        self.assertEqual(state.active_tab, Collection.STUDENTS)
        self.assertFalse(any(state.loading.values()))
        self.assertIsNone(state.modal)


if __name__ == "__main__":
    unittest.main()
