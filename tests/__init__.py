"""
Tests for the image-settings utility.

Test suite covers:
- Aspect ratio step and snapping math (unit)
- Resize engine and settings session state (unit)
- Image loading with Pillow
- Flask API endpoints and a live web server
- Text interface and the entry script
"""

__version__ = "1.0.0"
