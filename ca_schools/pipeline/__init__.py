"""Pipeline stages: ingest, normalizer and reports, plus the end-to-end runner."""
