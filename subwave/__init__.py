"""SubWave: waveform strip for timing subtitles against their media."""

__version__ = "0.1.0"
