import unittest
from unittest.mock import patch

from internship_sniper import config
from internship_sniper.schemas.pipeline_config import PipelineConfig, credential_present
from internship_sniper.schemas.uploaded_document import UploadedDocument
from internship_sniper.utils.helpers import DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE


class CredentialTests(unittest.TestCase):
    def test_missing_and_placeholder_keys_are_not_credentials(self):
        self.assertFalse(credential_present(""))
        self.assertFalse(credential_present("   "))
        self.assertFalse(credential_present(None))
        self.assertFalse(credential_present("your_gemini_api_key_here"))
        self.assertFalse(credential_present("YOUR_NVIDIA_API_KEY"))
        self.assertTrue(credential_present("AIzaSyExampleKey"))

    def test_default_config_has_no_configured_tiers(self):
        pipeline_config = PipelineConfig()
        self.assertFalse(pipeline_config.vision.is_configured)
        self.assertFalse(pipeline_config.text_a.is_configured)
        self.assertFalse(pipeline_config.text_b.is_configured)

    def test_config_is_immutable(self):
        pipeline_config = PipelineConfig()
        with self.assertRaises(Exception):
            pipeline_config.min_text_chars = 1


class LoadPipelineConfigTests(unittest.TestCase):
    def test_environment_values_flow_into_settings(self):
        with patch.object(config, "GEMINI_API_KEY", "g-key"), patch.object(config, "DO_API_KEY", ""), patch.object(
            config, "NVIDIA_API_KEY", "n-key"
        ):
            pipeline_config = config.load_pipeline_config()

        self.assertTrue(pipeline_config.vision.is_configured)
        self.assertFalse(pipeline_config.text_a.is_configured)
        self.assertTrue(pipeline_config.text_b.is_configured)
        self.assertEqual(pipeline_config.vision.models, config.VISION_MODELS)
        self.assertEqual(pipeline_config.vision.max_pages, 3)
        self.assertEqual(pipeline_config.text_a.endpoint, "https://inference.do-ai.run/v1")
        self.assertEqual(pipeline_config.text_a.max_input_chars, 8000)
        self.assertEqual(pipeline_config.text_a.timeout_seconds, 45.0)
        self.assertEqual(pipeline_config.text_b.endpoint, "https://integrate.api.nvidia.com/v1/chat/completions")
        self.assertEqual(pipeline_config.text_b.max_tokens, 4000)
        self.assertEqual(pipeline_config.text_b.top_p, 1.0)
        self.assertEqual(pipeline_config.text_b.temperature, 0.1)

    def test_env_list_parsing(self):
        with patch.dict("os.environ", {"SOME_MODELS": " a , ,b "}):
            self.assertEqual(config._env_list("SOME_MODELS", ("x",)), ("a", "b"))
        with patch.dict("os.environ", {"SOME_MODELS": ""}):
            self.assertEqual(config._env_list("SOME_MODELS", ("x",)), ("x",))


class UploadedDocumentTests(unittest.TestCase):
    def test_declared_type_is_normalized(self):
        document = UploadedDocument.from_upload(b"x", "photo.jpg", "image/jpg")
        self.assertEqual(document.media_type, "image/jpeg")
        self.assertTrue(document.is_image)

    def test_generic_type_falls_back_to_extension(self):
        self.assertEqual(UploadedDocument.from_upload(b"x", "cv.PDF", "application/octet-stream").media_type, PDF_MEDIA_TYPE)
        self.assertEqual(UploadedDocument.from_upload(b"x", "cv.docx").media_type, DOCX_MEDIA_TYPE)

    def test_unknown_extension_keeps_declared_type(self):
        document = UploadedDocument.from_upload(b"x", "cv.rtf", "application/octet-stream")
        self.assertEqual(document.media_type, "application/octet-stream")
        self.assertFalse(document.is_pdf)
        self.assertEqual(document.size, 1)


if __name__ == "__main__":
    unittest.main()
