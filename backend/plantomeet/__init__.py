"""PlanToMeet backend: availability-to-schedule engine, poll lifecycle, HTTP API."""
