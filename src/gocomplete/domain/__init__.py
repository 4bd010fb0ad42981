"""Domain layer - completion models, errors and collaborator protocols.

This layer contains:
- types: CompletionItem, RawSuggestion, positions and edits
- document: in-memory text buffer used to build completion requests
- exceptions: the gocode failure taxonomy
- golang: language tables (keywords, built-in types)
- protocols: interfaces for the services the completion core calls

The domain layer has no dependencies on the application or infrastructure
layers.
"""
