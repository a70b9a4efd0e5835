"""
This package contains the orchestration of the encode pipeline.
"""
