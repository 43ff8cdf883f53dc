"""Desktop front-end for the AI Image Detector."""
