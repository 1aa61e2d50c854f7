class RecordingSink:
    def __init__(self):
        self.messages = []

    async def deliver(self, text: str) -> None:
        self.messages.append(text)


class StaticFetcher:
    """Stands in for FeedFetcher, returning canned results in source order."""

    def __init__(self, results):
        self.results = results

    async def fetch_all(self, sources):
        return list(self.results)
