"""Serves registered widget trees as HTML pages.

- each page is a factory returning a fresh form tree per request
- GET displays the tree, POST processes the submitted data first
- head entries of the displayed tree are written into the page head
"""
