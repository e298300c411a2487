"""
WAQI client test suite

Tests organized by module:
- waqi/test_bands.py: AQI band boundaries
- waqi/test_config.py: output/scale parsing + token resolution
- waqi/test_models.py: strict envelope decoding
- waqi/test_client.py: HTTP transport (mocked requests)
- waqi/test_render.py: output-mode rendering
- waqi/test_cli.py: end-to-end CLI runs (mocked client)
"""
