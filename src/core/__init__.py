"""
Core catalog logic for the video player.

This module is framework-agnostic - it doesn't import FastAPI, Google Cloud
or any infrastructure concerns. Everything here is a pure function of the
bucket snapshot, so it can be tested without network access.
"""
