"""Personnel Tracking System (PTS) backend: phone + SMS two-factor login and branch personnel records."""
