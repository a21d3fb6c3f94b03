"""Presentation Layer"""
