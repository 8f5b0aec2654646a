"""Global constants for Pitch Engine."""

# Pitch names, A4 first (index 0 is A4 = 440 Hz)
PITCH_NAMES = ["A", "A#", "B", "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#"]

# Reference tuning
STANDARD_FREQUENCY = 440.0
STANDARD_OCTAVE = 4

# Supported musical range (Hz)
MINIMUM_FREQUENCY = 20.0
MAXIMUM_FREQUENCY = 4190.0

# Speed of sound in air (m/s)
SPEED_OF_SOUND = 343.0

# Capture defaults
DEFAULT_FRAME_SIZE = 4096
DEFAULT_SR = 44100

# Estimator defaults
DEFAULT_HPS_HARMONICS = 5
DEFAULT_YIN_THRESHOLD = 0.1

# Engine defaults
DEFAULT_BACKLOG_WARNING = 64  # frames
SILENCE_LEVEL = float("-inf")  # dBFS
