"""API Routes"""
