"""
FastAPI surface for SoftPack.

Mount with softpack_web.main:app, or build an isolated app for tests with
softpack_web.main.create_app(core).
"""
