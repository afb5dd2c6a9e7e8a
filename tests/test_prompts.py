from stock_agent.agents.prompts import build_analysis_prompt


def test_prompt_embeds_input_and_output_structure(stock_input):
    prompt = build_analysis_prompt(stock_input)

    assert '"asOf": "2025-06-30"' in prompt
    assert '"overallScore": number (0-100)' in prompt
    assert "{input_data}" not in prompt
    assert prompt.rstrip().endswith("}")
