"""Talent agency CMS backend: home page media, promotional entities, users."""
