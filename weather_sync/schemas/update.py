from pydantic import BaseModel, Field


class UpdateResponse(BaseModel):
    message: str = Field()

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "weather data for Montreal inserted"}
            ]
        }
    }
