"""Edges of the app: console, spreadsheet import, JSON export, calendar projection."""
