"""llamachat generation core.

This package drives an external llama.cpp style inference binary to answer
chat requests. The server handles:

- Active model tracking and model family detection
- Prompt rendering per model family (plain transcript, tagged template, or
  delegated to the binary's own conversation mode)
- One generation session at a time with streaming stop-marker detection,
  timeout, and cancellation
- Response sanitization of stop markers and template artifacts
"""
