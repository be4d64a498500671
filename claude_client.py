#!/usr/bin/env python3
"""
Request/response exchange with the Anthropic Messages API.
"""

import json
from dataclasses import dataclass, field, asdict

import requests


API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-3-haiku-20240307"
DEFAULT_MAX_TOKENS = 500
NO_CONTENT_TEXT = "No response content"


class ClaudeAPIError(Exception):
	"""Raised when the API answers with a non-success status."""

	def __init__(self, body):
		super().__init__(f"API Error: {body}")
		self.body = body


@dataclass
class Message:
	role: str
	content: str


@dataclass
class ClaudeRequest:
	model: str
	max_tokens: int
	messages: list = field(default_factory=list)

	def to_json(self):
		"""Compact JSON body, keys in declaration order."""
		return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))


@dataclass
class ContentBlock:
	type: str
	text: str


@dataclass
class ClaudeResponse:
	content: list
	model: str
	role: str

	@classmethod
	def from_dict(cls, data):
		"""Build a response from a decoded JSON body.

		Raises ValueError if a required key is missing or has the wrong shape.
		"""
		try:
			content = data["content"]
			if not isinstance(content, list):
				raise TypeError(f"content must be a list, not {type(content).__name__}")
			blocks = []
			for block in content:
				if not isinstance(block["type"], str) or not isinstance(block["text"], str):
					raise TypeError("content block type and text must be strings")
				blocks.append(ContentBlock(type=block["type"], text=block["text"]))
			return cls(content=blocks, model=data["model"], role=data["role"])
		except (KeyError, TypeError) as e:
			raise ValueError(f"Malformed response: {e!r}") from e

	def first_text(self):
		if not self.content:
			return NO_CONTENT_TEXT
		return self.content[0].text


def build_request(user_message, model=DEFAULT_MODEL, max_tokens=DEFAULT_MAX_TOKENS):
	"""Single-message request for one line of user input."""
	return ClaudeRequest(
		model=model,
		max_tokens=max_tokens,
		messages=[Message(role="user", content=user_message)]
	)


def build_headers(api_key, anthropic_version=ANTHROPIC_VERSION):
	return {
		"Content-Type": "application/json",
		"x-api-key": api_key,
		"anthropic-version": anthropic_version,
	}


def send_message(
	session,
	api_key,
	user_message,
	model=DEFAULT_MODEL,
	max_tokens=DEFAULT_MAX_TOKENS,
	api_url=API_URL,
	anthropic_version=ANTHROPIC_VERSION
):
	"""Send one user message and return the text of the first content block.

	Non-success statuses raise ClaudeAPIError. Network failures
	(requests.RequestException) and undecodable bodies (ValueError) propagate.
	"""
	request = build_request(user_message, model=model, max_tokens=max_tokens)
	response = session.post(
		api_url,
		data=request.to_json().encode("utf-8"),
		headers=build_headers(api_key, anthropic_version)
	)

	if 200 <= response.status_code < 300:
		return ClaudeResponse.from_dict(response.json()).first_text()
	raise ClaudeAPIError(response.text)


def new_session():
	"""HTTP client handle shared by every request of a chat."""
	return requests.Session()
