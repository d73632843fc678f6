#!/usr/bin/env python3
"""
Demo document showing the quillpdf elements.

Usage:
    python examples/demo.py output.pdf
"""

import argparse
import sys

from quillpdf import (
    Alignment,
    Break,
    Builtin,
    Color,
    Document,
    DocumentConfig,
    Effect,
    FrameCellDecorator,
    OrderedList,
    Paragraph,
    QuillPdfError,
    SimplePageDecorator,
    Style,
    TableLayout,
    Text,
    UnorderedList,
    builtin_family,
)
from quillpdf.utils.logger import setup_logging

LOREM_IPSUM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud "
    "exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat. Duis aute irure "
    "dolor in reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur. "
)


def build_document() -> Document:
    config = DocumentConfig(title="quillpdf demo", font_size=10, line_spacing=1.25)
    doc = Document(builtin_family(Builtin.HELVETICA), config)
    courier = doc.add_font_family(builtin_family(Builtin.COURIER))

    decorator = SimplePageDecorator(margins=10)
    decorator.set_header(lambda page: Paragraph(f"Page {page}").aligned(Alignment.CENTER))
    decorator.set_footer(lambda page: Text("quillpdf demo").styled(Style(font_size=8)))
    doc.set_page_decorator(decorator)

    doc.push(Paragraph("quillpdf demo").aligned(Alignment.CENTER).styled(Style(font_size=20).bold()))
    doc.push(Break(1.5))
    doc.push(
        Paragraph()
        .string("This document demonstrates ")
        .styled_string("styled", Effect.ITALIC)
        .string(" text, ")
        .styled_string("colored", Color.rgb(200, 0, 0))
        .string(" text and ")
        .styled_string("monospaced", Style(font_family=courier))
        .string(" text.")
    )
    doc.push(Break(1))

    doc.push(Paragraph("An unordered list:"))
    bullets = UnorderedList()
    for item in ("first item", "second item", LOREM_IPSUM):
        bullets.push(Paragraph(item))
    doc.push(bullets)

    doc.push(Paragraph("An ordered list:"))
    numbers = OrderedList(start=3)
    for item in ("third", "fourth", "fifth"):
        numbers.push(Paragraph(item))
    doc.push(numbers)
    doc.push(Break(1))

    table = TableLayout([1, 2])
    table.set_cell_decorator(FrameCellDecorator(True, True, False))
    table.row().element(Paragraph("Weight").padded(1)).element(Paragraph("Column").padded(1)).push()
    for index in range(1, 4):
        table.row().element(Paragraph(str(index)).padded(1)).element(
            Paragraph(LOREM_IPSUM).padded(1)
        ).push()
    doc.push(table)
    doc.push(Break(1))

    for _ in range(5):
        doc.push(Paragraph(LOREM_IPSUM * 3).framed().padded((2, 0)))
    return doc


def main() -> int:
    parser = argparse.ArgumentParser(description="Render the quillpdf demo document")
    parser.add_argument("output", help="Path of the PDF file to write")
    args = parser.parse_args()

    setup_logging("INFO")
    try:
        build_document().render_to_file(args.output)
    except QuillPdfError as exc:
        print(f"Failed to render the demo document: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
