import logging
import os
import tempfile
import unittest
import sys
from unittest import mock

pwd = os.path.dirname(os.path.realpath(__file__))
sys.path.append(os.path.join(pwd, "..", "src"))
from graphviz import Digraph  # noqa: E402
from AhoCorasick import AhoCorasick  # noqa: E402
import automaton_dumper  # noqa: E402
import kw_common as kwc  # noqa: E402


class testAutomatonDumper(unittest.TestCase):
    def setUp(self):
        # his: 0 -h-> 1 -i-> 2 -s-> 3, she: 0 -s-> 4 -h-> 5 -e-> 6
        self.ac = AhoCorasick(["his", "she"])

    def test_make_graph_builds(self):
        self.assertFalse(self.ac.is_built)
        automaton_dumper.make_graph(self.ac)
        self.assertTrue(self.ac.is_built)

    def test_graph_edges(self):
        src = automaton_dumper.make_graph(self.ac).source
        self.assertIn("0 -> 1", src)
        self.assertIn("4 -> 5", src)
        # "sh" fails to "h"
        self.assertIn("5 -> 1", src)
        self.assertIn("dashed", src)
        self.assertIn("doublecircle", src)
        self.assertNotIn("4 -> 0", src)

    def test_root_failures(self):
        src = automaton_dumper.make_graph(self.ac, show_root_failures=True).source
        self.assertIn("4 -> 0", src)

    def test_int_symbols_not_drawn_as_chars(self):
        src = automaton_dumper.make_graph(AhoCorasick([[65]])).source
        self.assertIn("label=65", src)
        self.assertNotIn("label=A", src)

        src = automaton_dumper.make_graph(AhoCorasick([b"A"])).source
        self.assertIn("label=A", src)

    def test_state_label(self):
        self.assertEqual(automaton_dumper.state_label(self.ac, 0), "0")
        self.assertEqual(automaton_dumper.state_label(self.ac, 3), "3\\n[0] his")
        bac = AhoCorasick([b"a\\b"])
        self.assertEqual(automaton_dumper.state_label(bac, 3), "3\\n[0] a\\\\\\\\b")

    def test_dump_too_many_states(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(automaton_dumper.dump(self.ac, out_dir=tmp, max_states=3))

    def test_dump(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_dir = os.path.join(tmp, "graphs")
            expected = os.path.join(out_dir, "trie.svg")
            with mock.patch.object(
                Digraph, "render", return_value=expected
            ) as render:
                path = automaton_dumper.dump(self.ac, "trie", out_dir=out_dir)
            self.assertEqual(path, expected)
            self.assertTrue(os.path.isdir(out_dir))
            render.assert_called_once()
            self.assertEqual(render.call_args[0][0], os.path.join(out_dir, "trie"))

    def test_dump_uses_env_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch.dict(os.environ, {kwc.GRAPH_DIR_ENV: tmp}):
                with mock.patch.object(Digraph, "render") as render:
                    automaton_dumper.dump(self.ac)
            self.assertEqual(render.call_args[0][0], os.path.join(tmp, "automaton"))


class testKwCommon(unittest.TestCase):
    def test_env_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(kwc.read_env_configs(), (False, kwc.DEFAULT_GRAPH_DIR))

    def test_env_values(self):
        env = {kwc.LOG_ENV: "Yes", kwc.GRAPH_DIR_ENV: "/tmp/graphs"}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual(kwc.read_env_configs(), (True, "/tmp/graphs"))

    def test_setup_logging_from_env(self):
        with mock.patch.dict(os.environ, {kwc.LOG_ENV: "1"}, clear=True):
            with mock.patch("logging.basicConfig") as basic_config:
                kwc.setup_logging_from_env()
        basic_config.assert_called_once()

        with mock.patch.dict(os.environ, {}, clear=True):
            with mock.patch("logging.disable") as disable:
                kwc.setup_logging_from_env()
        disable.assert_called_once_with(logging.CRITICAL)

    def test_repr(self):
        self.assertEqual(kwc.keyword_repr("abc"), "abc")
        self.assertEqual(kwc.keyword_repr(b"ab\n"), "ab\\n")
        self.assertEqual(kwc.keyword_repr((1, 2)), "1 2")
        self.assertEqual(kwc.symbol_repr(ord("a"), as_byte=True), "a")
        self.assertEqual(kwc.symbol_repr(ord("a")), "97")
        self.assertEqual(kwc.symbol_repr(0), "0")


if __name__ == "__main__":
    unittest.main()
