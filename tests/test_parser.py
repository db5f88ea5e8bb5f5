from NoteMark import markdown_parser
from NoteMark.model import (
    Alignment,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Container,
    Emphasis,
    Heading,
    HorizontalRule,
    InlineText,
    LineBreak,
    ListBlock,
    Paragraph,
    Strong,
    TableBlock,
)


def test_parse_blocks_and_inline():
    md_text = """
# Introduction

Text with *italic*, **bold** and `code`.

- First
- Second

```python
print("hi")
```

> quoted

| A | B |
|---|:-:|
| 1 | 2 |

:::note
Inside
:::

---
"""
    document = markdown_parser.parse_markdown(md_text)
    blocks = document.blocks
    assert [type(block) for block in blocks] == [
        Heading,
        Paragraph,
        ListBlock,
        CodeBlock,
        BlockQuote,
        TableBlock,
        Container,
        HorizontalRule,
    ]
    assert blocks[0].level == 1
    assert blocks[0].inline == [InlineText("Introduction")]
    assert blocks[1].inline == [
        InlineText("Text with "),
        Emphasis([InlineText("italic")]),
        InlineText(", "),
        Strong([InlineText("bold")]),
        InlineText(" and "),
        CodeSpan("code"),
        InlineText("."),
    ]
    assert not blocks[2].ordered and len(blocks[2].items) == 2
    assert blocks[3].language == "python"
    assert blocks[3].code == 'print("hi")'
    assert blocks[5].alignments == [Alignment.NONE, Alignment.CENTER]
    assert blocks[5].header == [[InlineText("A")], [InlineText("B")]]
    assert blocks[5].rows == [[[InlineText("1")], [InlineText("2")]]]
    assert blocks[6].label == "note"
    assert blocks[6].blocks == [Paragraph(inline=[InlineText("Inside")])]


def test_lazy_continuation_extends_quoted_paragraph():
    document = markdown_parser.parse_markdown("> first\nsecond")
    assert len(document.blocks) == 1
    quote = document.blocks[0]
    assert isinstance(quote, BlockQuote)
    assert quote.blocks == [Paragraph(inline=[InlineText("first"), LineBreak(), InlineText("second")])]


def test_lazy_continuation_in_list_item():
    document = markdown_parser.parse_markdown("- one\ntwo")
    (block,) = document.blocks
    assert isinstance(block, ListBlock)
    assert block.items[0].blocks == [Paragraph(inline=[InlineText("one"), LineBreak(), InlineText("two")])]


def test_nested_lists_follow_indentation():
    document = markdown_parser.parse_markdown("- a\n  - b\n    1. c\n- d")
    outer = document.blocks[0]
    assert isinstance(outer, ListBlock) and len(outer.items) == 2
    inner = outer.items[0].blocks[1]
    assert isinstance(inner, ListBlock) and not inner.ordered
    innermost = inner.items[0].blocks[1]
    assert isinstance(innermost, ListBlock) and innermost.ordered and innermost.start == 1


def test_ordered_list_start_number():
    document = markdown_parser.parse_markdown("7. seven\n8. eight")
    block = document.blocks[0]
    assert block.ordered and block.start == 7 and len(block.items) == 2


def test_changing_bullet_starts_new_list():
    document = markdown_parser.parse_markdown("- a\n+ b")
    assert [type(block) for block in document.blocks] == [ListBlock, ListBlock]


def test_loose_list_detection():
    loose = markdown_parser.parse_markdown("- a\n\n- b").blocks[0]
    tight = markdown_parser.parse_markdown("- a\n- b\n\nafter").blocks[0]
    assert loose.loose
    assert not tight.loose


def test_blank_between_blocks_of_one_item_makes_list_loose():
    block = markdown_parser.parse_markdown("- a\n\n  b").blocks[0]
    assert block.loose
    assert len(block.items) == 1 and len(block.items[0].blocks) == 2


def test_ordered_marker_not_at_one_does_not_interrupt_paragraph():
    document = markdown_parser.parse_markdown("total\n2. apples")
    assert [type(block) for block in document.blocks] == [Paragraph]


def test_heading_interrupts_paragraph():
    document = markdown_parser.parse_markdown("text\n## Title\n\nmore")
    assert [type(block) for block in document.blocks] == [Paragraph, Heading, Paragraph]


def test_heading_takes_following_text_lines():
    document = markdown_parser.parse_markdown("## Goodbye\nI'm *happy*\n- item")
    heading, block = document.blocks
    assert heading == Heading(
        level=2,
        inline=[InlineText("Goodbye"), LineBreak(), InlineText("I'm "), Emphasis([InlineText("happy")])],
    )
    assert isinstance(block, ListBlock)


def test_empty_heading_stays_on_its_line():
    document = markdown_parser.parse_markdown("#\ntext")
    assert document.blocks == [Heading(level=1, inline=[]), Paragraph(inline=[InlineText("text")])]


def test_fence_keeps_tabs_verbatim():
    document = markdown_parser.parse_markdown("```make\nall:\n\tgo build\n\t\n```")
    assert document.blocks == [CodeBlock(language="make", code="all:\n\tgo build\n\t")]


def test_fence_in_list_item_keeps_tab_after_item_indent():
    document = markdown_parser.parse_markdown("- item\n  ```\n  \tcode\n\tsplit\n  ```")
    item = document.blocks[0].items[0]
    assert item.blocks[1] == CodeBlock(language=None, code="\tcode\n  split")


def test_fence_in_blockquote_keeps_tabs():
    document = markdown_parser.parse_markdown("> ```\n> \tx\n> ```")
    assert document.blocks[0].blocks == [CodeBlock(language=None, code="\tx")]


def test_unterminated_fence_keeps_remaining_lines():
    document = markdown_parser.parse_markdown("```\nline one\n\n# not a heading")
    (block,) = document.blocks
    assert isinstance(block, CodeBlock)
    assert block.language is None
    assert block.code == "line one\n\n# not a heading"


def test_fence_closes_on_longer_fence_of_same_char():
    document = markdown_parser.parse_markdown("~~~\n```\n~~~~~\nafter")
    assert isinstance(document.blocks[0], CodeBlock)
    assert document.blocks[0].code == "```"
    assert isinstance(document.blocks[1], Paragraph)


def test_fence_inside_list_item_strips_item_indent():
    document = markdown_parser.parse_markdown("- item\n  ```sh\n  echo hi\n  ```")
    item = document.blocks[0].items[0]
    assert item.blocks[1] == CodeBlock(language="sh", code="echo hi")


def test_nested_containers_close_innermost_first():
    document = markdown_parser.parse_markdown(":::outer\n:::inner\ntext\n:::\nafter\n:::")
    (outer,) = document.blocks
    assert isinstance(outer, Container) and outer.label == "outer"
    inner, paragraph = outer.blocks
    assert isinstance(inner, Container) and inner.label == "inner"
    assert paragraph == Paragraph(inline=[InlineText("after")])


def test_bare_container_fence_without_open_container_is_text():
    document = markdown_parser.parse_markdown(":::")
    assert document.blocks == [Paragraph(inline=[InlineText(":::")])]


def test_nested_blockquotes():
    document = markdown_parser.parse_markdown("> outer\n>\n> > inner")
    quote = document.blocks[0]
    assert isinstance(quote.blocks[0], Paragraph)
    assert isinstance(quote.blocks[1], BlockQuote)


def test_parse_accepts_utf8_bytes():
    document = markdown_parser.parse_markdown("# Привет".encode("utf-8"))
    assert document.blocks[0].inline == [InlineText("Привет")]
