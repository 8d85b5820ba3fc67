"""HTTP lookup service for playback clients that cannot run Python."""
