"""Outbound adapters: fetchers, embedding and model backends, stores."""
