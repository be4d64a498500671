#!/usr/bin/env python3
"""
Cogito Lab: console chat with Claude.
"""

import argparse
import gnureadline as readline
import json

# Keep basic line editing (arrows, copy/paste) but no history
readline.set_history_length(0)
readline.set_auto_history(False)
import os
from copy import deepcopy

import requests
from dotenv import load_dotenv
from rich.emoji import Emoji
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

import claude_client
from claude_client import ClaudeAPIError
from markdown_skin import DEFAULT_STYLES, make_console, print_styled_response

USER_COLOR = "\033[96m"
INFO_COLOR = "\033[95m"
RESET_COLOR = "\033[0m"

API_KEY_ENV = "CLAUDE_API_KEY"
CONFIG_PATH = os.environ.get("COGITO_CONFIG_PATH", "cogito.json")
EXIT_COMMANDS = ("quit", "exit")
CLIENT_SETTINGS = ("model", "max_tokens", "api_url", "anthropic_version")

DEFAULT_CONFIG = {
	"model": claude_client.DEFAULT_MODEL,
	"max_tokens": claude_client.DEFAULT_MAX_TOKENS,
	"api_url": claude_client.API_URL,
	"anthropic_version": claude_client.ANTHROPIC_VERSION,
	"styles": dict(DEFAULT_STYLES)
}


def load_config(path=None):
	"""Load configuration from file or fall back to defaults."""
	path = path or CONFIG_PATH
	config = deepcopy(DEFAULT_CONFIG)
	if not os.path.exists(path):
		return config
	try:
		with open(path, 'r', encoding='utf-8') as f:
			data = json.load(f)
	except (IOError, json.JSONDecodeError):
		print(f"{RESET_COLOR}Warning: Could not read config file at {path}. Using defaults only.")
		return config

	if isinstance(data, dict):
		for key in ("model", "api_url", "anthropic_version"):
			if isinstance(data.get(key), str):
				config[key] = data[key]
		max_tokens = data.get("max_tokens")
		if isinstance(max_tokens, int) and not isinstance(max_tokens, bool) and max_tokens > 0:
			config["max_tokens"] = max_tokens
		if isinstance(data.get("styles"), dict):
			config["styles"].update(
				{name: style for name, style in data["styles"].items() if name in DEFAULT_STYLES and isinstance(style, str)}
			)
	return config


def get_api_key():
	"""Read the API key, loading a local .env file first."""
	load_dotenv()
	api_key = os.environ.get(API_KEY_ENV)
	if not api_key:
		raise SystemExit(f"{API_KEY_ENV} must be set in .env file")
	return api_key


def mask_key(api_key):
	"""Shorten a key for display, e.g. 'sk-ant-...wxyz'."""
	if len(api_key) > 10:
		return f"{api_key[:7]}...{api_key[-4:]}"
	return "too_short"


def print_info(message):
	print(f"{INFO_COLOR}{message}{RESET_COLOR}")


def client_settings(config):
	"""The config entries the HTTP exchange needs."""
	return {key: config[key] for key in CLIENT_SETTINGS}


def is_exit_command(user_message):
	return user_message.lower() in EXIT_COMMANDS


def ask_claude(session, api_key, user_message, config, console):
	"""Send one message while the thinking spinner runs."""
	with Progress(
		SpinnerColumn(),
		TextColumn("[progress.description]{task.description}"),
		TimeElapsedColumn(),
		console=console,
		transient=True
	) as progress:
		progress.add_task(f"[cyan]{Emoji.replace(':thinking_face:')} Claude is thinking...", total=None)
		return claude_client.send_message(session, api_key, user_message, **client_settings(config))


def run_chat(session, api_key, config, console):
	"""Read lines until an exit command, answering each one."""
	prompt = f"\n{USER_COLOR}{Emoji.replace(':brain:')} You: {RESET_COLOR}"
	while True:
		user_message = input(prompt).strip()

		if is_exit_command(user_message):
			print(f"{Emoji.replace(':waving_hand:')} Goodbye! Thanks for chatting with Claude!")
			return

		if not user_message:
			continue

		try:
			response = ask_claude(session, api_key, user_message, config, console)
		except (ClaudeAPIError, requests.RequestException, ValueError) as e:
			print(f"Error: {e}")
			continue

		print_styled_response(response, console)


def main(argv=None):
	parser = argparse.ArgumentParser(description='Console Claude chat')
	parser.add_argument('--model', type=str, help='Override model for this session')
	parser.add_argument('--max-tokens', type=int, help='Override max output tokens for this session')
	parser.add_argument('--show-key', action='store_true', help='Show the masked API key on startup')
	args = parser.parse_args(argv)

	config = load_config()
	if args.model:
		config["model"] = args.model
	if args.max_tokens is not None:
		if args.max_tokens < 1:
			parser.error("--max-tokens must be a positive integer")
		config["max_tokens"] = args.max_tokens

	print(f"{Emoji.replace(':robot:')} Welcome to Cogito Lab - Your Claude Chat!")
	print(f"{Emoji.replace(':light_bulb:')} Type 'quit' or 'exit' to end the conversation")

	api_key = get_api_key()
	print_info(f"Using model: {config['model']}")
	if args.show_key:
		print_info(f"API key: {mask_key(api_key)}")

	console = make_console(config["styles"])
	session = claude_client.new_session()
	try:
		run_chat(session, api_key, config, console)
	finally:
		session.close()


if __name__ == "__main__":
	main()
