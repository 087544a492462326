from jsondoc._sections import SectionBuilder
from jsondoc._tokens import Annotation, Line, Section, SyntaxToken


def _push(builder: SectionBuilder, text: str, *, indent: int = 0) -> None:
    builder.line_for_push(indent=indent).tokens.append(SyntaxToken(text))


def _texts(section: Section) -> list[str]:
    return [line.text for line in section.lines]


def test_close_is_permanent() -> None:
    builder = SectionBuilder()
    builder.open("a", Annotation("A"))
    _push(builder, "x")
    builder.close()
    builder.new_line()
    _push(builder, "y")

    # the newline after a closed section starts a new one instead
    assert [(s.id, s.closed, _texts(s)) for s in builder.sections] == [
        (None, False, [""]),
        ("a", True, ["x"]),
        (None, False, ["y"]),
    ]


def test_close_anonymous_section_is_noop() -> None:
    builder = SectionBuilder()
    _push(builder, "x")
    builder.close()
    _push(builder, "y")
    assert len(builder.sections) == 1
    assert builder.current.lines[0].text == "xy"


def test_current_id() -> None:
    builder = SectionBuilder()
    assert builder.current_id() is None
    builder.open("a.b", Annotation("B"))
    assert builder.current_id() == "a.b"
    builder.close()
    assert builder.current_id() is None


def test_finish_normalizes_indentation() -> None:
    builder = SectionBuilder()
    builder.open("deep", Annotation("Deep"))
    _push(builder, "a", indent=2)
    builder.new_line()
    builder.new_line()
    _push(builder, "b", indent=3)
    builder.close()

    document = builder.finish()
    assert document.sections[1] == Section(
        id="deep",
        header=Annotation("Deep"),
        closed=True,
        lines=[
            Line(0, [SyntaxToken("a")]),
            Line(0),
            Line(1, [SyntaxToken("b")]),
        ],
        base_indent=2,
    )
    for section in document.sections:
        indents = [line.indent for line in section.lines if line.tokens]
        assert min(indents, default=0) == 0


def test_finish_flags_active_section() -> None:
    builder = SectionBuilder()
    builder.open("a", Annotation("A"))
    builder.close()
    builder.open("b", Annotation("B"))
    builder.close()

    document = builder.finish(active_id="b")
    assert [(s.id, s.active) for s in document.sections] == [
        (None, False),
        ("a", False),
        ("b", True),
    ]
    assert builder.finish(active_id="missing").sections == builder.finish().sections


def test_finish_does_not_flag_anonymous_sections() -> None:
    builder = SectionBuilder()
    document = builder.finish(active_id=None)
    assert document.sections[0].active is False


def test_repeated_ids_are_not_anchored_again() -> None:
    builder = SectionBuilder()
    for text in ("x", "y"):
        builder.open("a", Annotation("A"))
        _push(builder, text)
        builder.close()

    document = builder.finish(active_id="a")
    assert [(s.id, s.header, s.active, _texts(s)) for s in document.sections] == [
        (None, None, False, [""]),
        ("a", Annotation("A"), True, ["x"]),
        (None, Annotation("A"), False, ["y"]),
    ]
