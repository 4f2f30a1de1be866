"""Declarative bubble chart configuration helpers.

Bubble charts are driven by `BubbleFormData` and query rows rather than
bespoke view logic. This package contains the schema, series construction,
tooltip formatting, layout helpers and the option assembler used by the views.
"""
