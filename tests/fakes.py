import time


class FakeEmbedder:
    def __init__(self, vector=None, error=None):
        self.vector = vector or [0.1, 0.2, 0.3]
        self.error = error
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.vector


class FakeIndex:
    def __init__(self, matches=None, error=None):
        self.matches = matches or []
        self.error = error
        self.calls = []
        self.upserted = []

    def search(self, vector, top_k):
        self.calls.append((vector, top_k))
        if self.error:
            raise self.error
        return self.matches[:top_k]

    def upsert(self, vectors):
        self.upserted.extend(vectors)
        return len(vectors)


class FakeCatalog:
    """``nutrition`` maps candidate id to a payload, RATE_LIMITED, or an exception to raise."""

    def __init__(self, candidates=None, nutrition=None, search_error=None, delay=0.0):
        self.candidates = candidates or []
        self.nutrition = nutrition or {}
        self.search_error = search_error
        self.delay = delay
        self.searches = []
        self.fetched = []

    def search_recipes(self, filters):
        self.searches.append(filters)
        if self.search_error:
            raise self.search_error
        return list(self.candidates)

    def fetch_nutrition(self, recipe_id):
        self.fetched.append(recipe_id)
        if self.delay:
            time.sleep(self.delay)
        outcome = self.nutrition.get(recipe_id, {})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeBackend:
    def __init__(self, text="# Your Personalized Nutrition Plan", error=None):
        self.text = text
        self.error = error
        self.prompts = []
        self.configs = []

    def generate(self, prompt, config):
        self.prompts.append(prompt)
        self.configs.append(config)
        if self.error:
            raise self.error
        return self.text


def widget(calories, protein, carbs, fat):
    """Nutrition widget payload shaped like the catalog's (strings with units)."""
    return {"calories": str(calories), "protein": f"{protein}g", "carbs": f"{carbs}g", "fat": f"{fat}g"}


