"""Adapters wiring the pipeline into web frameworks."""
