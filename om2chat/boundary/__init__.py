"""Boundary layer: datastore and model-provider adapters."""
