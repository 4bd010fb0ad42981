"""Application layer - the suggestion orchestration pipeline.

Context classification, gocode output parsing, snippet synthesis, package
matching and the merger that ties them together.
"""
