# -*- coding: utf-8 -*-
APP_NAME = "AI Image Detector"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Heuristic AI-generation likelihood from pixel statistics"

# GUI theming + sizing
GUI_SETTINGS = {
    "window": {
        "title": f"{APP_NAME}: Heuristic Version",
        "width": 720,
        "height": 640,
        "min_width": 520,
        "min_height": 480,
    },
    "preview_max_height": 320,
    "colors": {
        "ai": {"background": "#fff1f0", "foreground": "#7f1d1d"},
        "real": {"background": "#f0fff4", "foreground": "#064e3b"},
    },
}

SUPPORTED_IMAGE_FORMATS = [".png", ".bmp", ".jpg", ".jpeg", ".webp", ".tif", ".tiff"]

# Logging
LOGGING_SETTINGS = {
    "level": "INFO",           # DEBUG/INFO/WARNING/ERROR
    "log_dir": "logs",
    "log_file": "aidetector.log",
    "max_bytes": 2 * 1024 * 1024,
    "backup_count": 3,
    "file_logging": True,
}

# Detection constants. Empirical values, keep them literal.
DETECTION_SETTINGS = {
    "max_edge": 512,
    "min_edge": 64,
    "weights": {
        "edge_energy": 0.45,
        "channel_std_dev": 0.30,
        "saturation": 0.10,
        "size_proxy": 0.15,
    },
    "edge_energy_ceiling": 150.0,
    "channel_std_ceiling": 60.0,
    "saturation_floor": 0.25,
    "saturation_span": 0.5,
    "size_ceiling_kb": 100.0,
    "jitter_span": 6.0,
    "ai_threshold": 90.0,
}

# Text report
REPORT_SETTINGS = {
    "title": f"{APP_NAME} - Heuristic Version",
    "method": "Pixel statistics heuristic (edges, channel variance, saturation, file size)",
    "disclaimer": (
        "Heuristic estimate only. This score is not a forensic determination "
        "and carries no accuracy guarantee."
    ),
    "default_filename": "ai_detector_report.txt",
}
