"""Shared validators package for the application.

This package contains the field predicates used by signup, profile and admin
schemas. Every predicate is pure and returns a bool; it never raises.

Available validators:
- bounds.py: Immutable length bounds table
- validator.py: InputValidator, the predicates bound to one bounds table
- email.py: Email format check
- password.py: Password length check
- phone.py: Phone number digit-count check
- name.py: Name length check
- fields.py: ValueError-raising checks for pydantic field validators
"""
