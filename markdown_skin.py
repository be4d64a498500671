#!/usr/bin/env python3
"""
Markdown style sheet and renderer for Claude replies.
"""

from rich.console import Console
from rich.markdown import CodeBlock, Markdown
from rich.padding import Padding
from rich.text import Text
from rich.theme import Theme


SEPARATOR = "-" * 60

DEFAULT_STYLES = {
	"heading": "bold rgb(100,200,255)",
	"bold": "bold rgb(255,255,100)",
	"italic": "italic rgb(200,200,200)",
	"code_block": "rgb(200,255,200) on rgb(40,40,40)",
	"inline_code": "rgb(255,200,100) on rgb(60,60,60)",
}

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")


def build_theme(styles=None):
	"""Map the style sheet onto rich's markdown style names."""
	sheet = dict(DEFAULT_STYLES)
	if styles:
		sheet.update(styles)
	theme_styles = {f"markdown.{level}": sheet["heading"] for level in HEADING_LEVELS}
	theme_styles["markdown.strong"] = sheet["bold"]
	theme_styles["markdown.em"] = sheet["italic"]
	theme_styles["markdown.code"] = sheet["inline_code"]
	theme_styles["markdown.code_block"] = sheet["code_block"]
	return Theme(theme_styles)


class SkinCodeBlock(CodeBlock):
	"""Fenced code rendered in the style sheet's code block colors."""

	def __rich_console__(self, console, options):
		code = str(self.text).rstrip()
		style = console.get_style("markdown.code_block")
		yield Padding(Text(code, style=style), 1, style=style, expand=True)


class SkinMarkdown(Markdown):
	elements = dict(Markdown.elements)
	elements["fence"] = SkinCodeBlock
	elements["code_block"] = SkinCodeBlock


def make_console(styles=None, **kwargs):
	return Console(theme=build_theme(styles), **kwargs)


def print_styled_response(response, console):
	"""Print a reply as styled markdown between separator lines."""
	console.print()
	console.print(SEPARATOR, markup=False, highlight=False)
	console.print(SkinMarkdown(response))
	console.print(SEPARATOR, markup=False, highlight=False)
