import json
import unittest
from types import SimpleNamespace
from unittest.mock import Mock, patch

from goco.errors import ProviderError
from goco.providers.groq import GROQ_MODELS, GroqProvider


class DummyResponse(SimpleNamespace):
    def json(self):
        return json.loads(self.text)


def make_session(response=None):
    session = Mock()
    session.headers = {}
    session.request.return_value = response
    return session


def chat_reply(content):
    return DummyResponse(
        status_code=200,
        text=json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]}),
    )


class TestGroqProvider(unittest.TestCase):
    def test_list_models_is_static_copy(self) -> None:
        provider = GroqProvider(session=make_session())
        models = provider.list_models()
        self.assertEqual(models, GROQ_MODELS)
        models.append("mutated")
        self.assertNotIn("mutated", provider.list_models())

    def test_list_models_needs_no_network(self) -> None:
        session = make_session()
        GroqProvider(session=session).list_models()
        session.request.assert_not_called()

    def test_validate_model(self) -> None:
        provider = GroqProvider(session=make_session())
        provider.validate_model("llama-3.3-70b-versatile")
        with self.assertRaises(ProviderError) as ctx:
            provider.validate_model("gpt-2")
        self.assertIn("gpt-2", str(ctx.exception))
        self.assertIn("qwen/qwen3-32b", str(ctx.exception))

    def test_validate_model_propagates_listing_error(self) -> None:
        provider = GroqProvider(session=make_session())
        with patch.object(GroqProvider, "list_models", side_effect=ProviderError("groq", "simulated list error")):
            with self.assertRaises(ProviderError) as ctx:
                provider.validate_model("llama-3.3-70b-versatile")
        self.assertEqual(str(ctx.exception), "provider error (groq): failed to list models: simulated list error")

    def test_bearer_header_only_with_key(self) -> None:
        keyless = make_session()
        GroqProvider(session=keyless)
        self.assertNotIn("Authorization", keyless.headers)

        keyed = make_session()
        GroqProvider(api_key="gsk", session=keyed)
        self.assertEqual(keyed.headers["Authorization"], "Bearer gsk")

    def test_generate_without_key_fails(self) -> None:
        session = make_session()
        with self.assertRaises(ProviderError):
            GroqProvider(session=session).generate_commit_message("s", "d")
        session.request.assert_not_called()

    def test_generate_commit_message(self) -> None:
        session = make_session(chat_reply("fix(cli): handle empty diff"))
        provider = GroqProvider(api_key="gsk", model="llama-3.1-8b-instant", session=session)
        message = provider.generate_commit_message("M cli.py\n", "-a\n+b\n", "Use the commit type 'fix'.")
        self.assertEqual(message, "fix(cli): handle empty diff")

        payload = session.request.call_args.kwargs["json"]
        self.assertEqual(payload["model"], "llama-3.1-8b-instant")
        self.assertEqual(payload["messages"][0]["role"], "user")
        self.assertIn("Additional Instructions:\nUse the commit type 'fix'.", payload["messages"][0]["content"])
        self.assertTrue(session.request.call_args.args[1].endswith("/chat/completions"))

    def test_generate_strips_reasoning(self) -> None:
        session = make_session(chat_reply("<think>diff adds tests</think>\ntest: cover parser"))
        provider = GroqProvider(api_key="gsk", session=session)
        self.assertEqual(provider.generate_commit_message("s", "d"), "test: cover parser")

    def test_generate_no_choices(self) -> None:
        session = make_session(DummyResponse(status_code=200, text=json.dumps({"choices": []})))
        provider = GroqProvider(api_key="gsk", session=session)
        with self.assertRaises(ProviderError) as ctx:
            provider.generate_commit_message("s", "d")
        self.assertIn("no response", str(ctx.exception))

    def test_generate_error_status(self) -> None:
        session = make_session(DummyResponse(status_code=401, text="invalid api key"))
        provider = GroqProvider(api_key="gsk", session=session)
        with self.assertRaises(ProviderError) as ctx:
            provider.generate_commit_message("s", "d")
        self.assertIn("401", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
