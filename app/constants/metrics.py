class Constants:
    class Metric:
        PREFIX = "story_perspectives"
        HUNDRED_SAMPLING_RATE = 1
        INCREMENT_COUNT = 1
        API_LATENCY = "request_latency"
        API_COUNT = "request_count"
        STAGE_LATENCY = "story_analysis.stage_latency"
        FALLBACK_COUNT = "story_analysis.fallback_count"
        MODEL_REQUEST_COUNT = "story_analysis.model_request_count"

    class Tag:
        PATH = "path"
        METHOD = "method"
        CODE = "code"
        STAGE = "stage"
        CAUSE = "cause"
