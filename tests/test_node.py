import unittest

from justhtml.node import Element, Text

from thinspace.node import (
    child_nodes,
    clone_element,
    containers,
    index_in_parent,
    is_comment,
    is_element,
    is_text,
    set_children,
)
from thinspace.pipeline import parse


class TestNodeKinds(unittest.TestCase):
    def test_kinds_by_name(self) -> None:
        doc = parse("<!DOCTYPE html><p>x<!--c--></p>")
        doctype = doc.root.children[0]
        assert not is_element(doctype)

        p = doc.root.query("p")[0]
        text, comment = p.children
        assert is_element(p)
        assert is_text(text) and not is_element(text)
        assert is_comment(comment) and not is_text(comment)
        assert not is_element(doc.root)

    def test_text_has_no_child_nodes(self) -> None:
        assert child_nodes(Text("x")) == []
        assert child_nodes(Element("p", {}, "html")) == []

    def test_containers_include_template_contents(self) -> None:
        doc = parse("<div><template><b>x</b></template><p>y</p><br></div>", fragment=True)
        div = doc.root.children[0]
        template, p, _br = div.children
        assert template.template_content is not None
        self.assertEqual(containers(div), [template, p])
        self.assertEqual(containers(template)[-1:], [template.template_content])
        self.assertEqual(containers(p), [])


class TestIndexInParent(unittest.TestCase):
    def test_hint_is_checked(self) -> None:
        p = Element("p", {}, "html")
        a, b, c = Text("a"), Text("b"), Text("c")
        for child in (a, b, c):
            p.append_child(child)

        self.assertEqual(index_in_parent(b), 1)
        self.assertEqual(index_in_parent(b, 1), 1)
        self.assertEqual(index_in_parent(b, 0), 1)
        self.assertEqual(index_in_parent(c, 99), 2)

    def test_detached_node(self) -> None:
        with self.assertRaises(ValueError):
            index_in_parent(Text("x"))


class TestSetChildren(unittest.TestCase):
    def test_replaces_and_detaches(self) -> None:
        p = Element("p", {}, "html")
        a, b = Text("a"), Text("b")
        p.append_child(a)
        p.append_child(b)

        c = Text("c")
        set_children(p, [b, c])

        self.assertEqual(p.children, [b, c])
        assert b.parent is p
        assert c.parent is p
        assert a.parent is None


class TestCloneElement(unittest.TestCase):
    def test_deep_copy_with_own_attrs(self) -> None:
        template = Element("span", {"class": "gap"}, "html")
        inner = Element("i", {"title": "t"}, "html")
        inner.append_child(Text("x"))
        template.append_child(inner)

        clone = clone_element(template)

        assert clone is not template
        self.assertEqual(clone.name, "span")
        self.assertEqual(clone.attrs, {"class": "gap"})
        assert clone.attrs is not template.attrs
        assert clone.parent is None

        (copied,) = clone.children
        assert copied is not inner
        assert copied.parent is clone
        self.assertEqual(copied.attrs, {"title": "t"})
        self.assertEqual(copied.children[0].data, "x")

        copied.attrs["title"] = "changed"
        self.assertEqual(inner.attrs, {"title": "t"})


class TestRoundTrip(unittest.TestCase):
    # Text inside these elements is serialized as it was written.
    RAW_TEXT = [
        "<noscript>a &lt;b&gt; c</noscript>",
        "<xmp>&lt;i&gt;</xmp>",
        "<iframe>x &amp; y</iframe>",
        "<noembed>&lt;b&gt;</noembed>",
        "<noframes>&amp;</noframes>",
        "<style>p > a { content: '&amp;' }</style>",
        "<script>if (a < b && c) {}</script>",
    ]

    def test_raw_text_elements(self) -> None:
        for src in self.RAW_TEXT:
            with self.subTest(src=src):
                doc = parse(src, fragment=True)
                self.assertEqual(doc.to_html(pretty=False), src)

    def test_escaped_text_and_attributes(self) -> None:
        src = '<p title="a &amp; b">1 &lt; 2 &amp; 3</p>'
        self.assertEqual(parse(src, fragment=True).to_html(pretty=False), src)


if __name__ == "__main__":
    unittest.main()
