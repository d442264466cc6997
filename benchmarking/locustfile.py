"""Locust load testing script for the meeting notes API."""

import random

from locust import HttpUser, between, task

SAMPLE_TRANSCRIPTS = [
    "Alice and Bob discussed the budget.",
    "The team agreed to ship the beta on Friday. Carol owns the release notes.",
    "Dan raised hiring concerns; Erin will draft a proposal for next week.",
]


class MeetingNotesUser(HttpUser):
    """Simulated user for load testing the API."""

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    def on_start(self) -> None:
        self.summary_ids: list[str] = []

    @task(3)
    def list_recent_summaries(self) -> None:
        """Fetch the recent summaries list - most common operation."""
        response = self.client.get("/api/summaries")
        if response.ok:
            self.summary_ids = [s["id"] for s in response.json().get("summaries", [])]

    @task(2)
    def open_summary(self) -> None:
        """Open a summary from the recent list."""
        if not self.summary_ids:
            return
        summary_id = random.choice(self.summary_ids)
        self.client.get(f"/api/summaries/{summary_id}", name="/api/summaries/[id]")

    @task(1)
    def upload_inline_text(self) -> None:
        """Submit an inline transcript for normalization."""
        self.client.post("/api/upload", json={"text": random.choice(SAMPLE_TRANSCRIPTS)})

    @task(1)
    def health(self) -> None:
        """Liveness probe."""
        self.client.get("/api/health")
