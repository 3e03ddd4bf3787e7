"""Adapters that load catalog records from external stores."""
