"""
TTS Gateway.

HTTP service that turns text into speech through third-party vendors
(gTTS, Google Cloud Text-to-Speech, AWS Polly, pyttsx3, macOS say) and
returns the audio as a download or as a URL in local storage or S3.
"""

__version__ = "0.1.0"
