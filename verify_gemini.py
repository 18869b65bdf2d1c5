from api.config import ConfigurationError, load_settings
from api.gemini import EMPTY_RESPONSE_TEXT, MODEL_NAME, HandoverSummarizer, build_tracer

# --- CONFIGURATION ---
TEST_SYSTEM_PROMPT = "You are a concise assistant. Reply with a short shift handover summary."
TEST_QUERY = "Patient in bed 4 had a fall at 02:00, no injuries, obs stable, family informed."

def main():
    print("--- Running Gemini Verification Test ---")
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ ERROR: {e}")
        return

    print(f"Connecting to Gemini ({MODEL_NAME})...")
    summarizer = HandoverSummarizer(settings, tracer=build_tracer(settings))
    if summarizer.tracer is not None:
        print("✅ Langfuse tracing enabled.")

    print(f"Sending test query: '{TEST_QUERY}'")
    result = summarizer.summarize(TEST_QUERY, TEST_SYSTEM_PROMPT)

    print("\n--- Gemini Response ---")
    if not result.ok:
        print(f"❌ TEST FAILED: Gemini call raised an error: {result.error}")
    elif result.summary == EMPTY_RESPONSE_TEXT:
        print("❌ TEST FAILED: Gemini returned an empty response.")
    else:
        print(f"  {result.summary[:300]}")
        print("\n✅ TEST PASSED: Successfully generated a summary.")

if __name__ == "__main__":
    main()
