"""Core building blocks: errors, hashing, tokens, logging and the authorization gate."""
