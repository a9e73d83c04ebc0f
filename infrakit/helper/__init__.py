"""Helpers for strings, numbers, lists, conversion, dates and networking."""