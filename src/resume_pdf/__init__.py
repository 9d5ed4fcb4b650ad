"""
resume-pdf - server-side LaTeX rendering of resume documents.

Loads a LaTeX template, fills it with resume data and compiles it with pdflatex.
When no PDF can be produced the caller falls back to client-side rendering.
"""

__version__ = "0.1.0"
