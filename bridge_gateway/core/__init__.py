"""Core dispatch, retry and logging components for the Bridge gateway."""
