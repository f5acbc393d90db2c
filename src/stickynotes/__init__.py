"""Keeps a small collection of text notes, editable one at a time and saved to a JSON file between sessions.

This package holds the state and rules only; drawing the list and the editor is up to the host application,
which calls into :class:`stickynotes.controller.ViewController`.

To use the Python API, look at :class:`stickynotes.api.StickyNotes`
"""
