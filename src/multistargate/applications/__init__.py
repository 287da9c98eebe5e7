"""Concrete applications pluggable into the dispatcher."""
