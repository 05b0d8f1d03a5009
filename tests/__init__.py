"""Test suite for jschema.

This package contains tests for:
- Value classification and structural equality
- Schema parsing, meta-schema checking and path navigation
- Error records and the error sink
- The validation engine, one constraint category at a time
- Integration scenarios through the Validator handle
"""
