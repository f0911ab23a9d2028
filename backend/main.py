import logging

import uvicorn
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from demtick import config
from demtick.exceptions import DemoParserCorruptedFileException
from demtick.parser import DemoParser

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(title="demtick API")

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.post("/analyze-demo")
async def analyze_demo(demo: UploadFile = File(...)):
    logger.info(f"Received demo file: {demo.filename}")

    try:
        data = await demo.read(config.MAX_UPLOAD_BYTES + 1)
        if len(data) > config.MAX_UPLOAD_BYTES:
            raise HTTPException(status_code=413, detail="Demo file too large")

        analysis = DemoParser(data).to_dict()
    except DemoParserCorruptedFileException as e:
        logger.error(f"Error during analysis of {demo.filename}: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    finally:
        await demo.close()

    return {
        "success": True,
        "data": analysis
    }

@app.get("/")
async def root():
    return {"message": "demtick API is running"}


if __name__ == "__main__":
    uvicorn.run(app, host=config.HOST, port=config.PORT)
