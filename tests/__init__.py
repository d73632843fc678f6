"""
Test suite for the quillpdf project.
"""
