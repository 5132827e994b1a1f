"""
kvv TUI — Textual front end for the browsing session.

KvvApp lays out the vault selector, secrets, versions and value panes and
routes keys to Session intents.
"""
