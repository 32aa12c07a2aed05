"""
Services Layer

Pure scheduling, scoring, ranking and roster services that:
- Accept plain values (models, sequences, config)
- Return new values (models, dataclasses) or a typed rejection
- Do NOT read or write storage, send notifications or keep state between calls
- Do NOT mutate their arguments
"""
