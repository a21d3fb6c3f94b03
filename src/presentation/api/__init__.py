"""API"""
