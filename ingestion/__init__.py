"""Image ingestion: decoding and encoding of image payloads."""
