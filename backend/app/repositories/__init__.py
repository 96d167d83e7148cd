"""Narrow query functions over the relational store."""
