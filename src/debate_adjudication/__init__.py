"""AI adjudication service for parliamentary debate transcripts."""
