# LLM module (v3.0.0)
from outfit_ai.llm.llm_adapter import LLMClient
from outfit_ai.llm.errors import classify_error
from outfit_ai.llm.extractor import extract, extract_object, extract_fields, strip_code_fences
