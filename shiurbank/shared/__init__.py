"""Shared cross-cutting helpers: request context, logging and tracing."""
