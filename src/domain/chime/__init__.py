"""Chime Domain"""
