import base64
import json
from fastapi import FastAPI, HTTPException, Request

app = FastAPI(title="Mock Extraction Server", version="1.0.0")

# Payslip file content (the persona name) -> what the model would extract
PERSONAS = {
    "servidor_regular": {
        "baseIR": 1000.00,
        "contrachequeData": {"servidor": "MARIA DA SILVA", "matricula": "1160815/2774526", "orgao": "MINISTERIO DA SAUDE", "competencia": "08/2025"},
        "items": [
            {"description": "34228 - EMPREST BCO PRIVADOS - PAN", "value": 200.00, "bank": "PAN", "contract": "312456", "installmentIndex": "44/96", "startDate": "01/2022", "endDate": "12/2029"},
            {"description": "35012 - AMORT CARTAO CREDITO - BMG", "value": 30.00, "bank": "BMG", "contract": "998877", "installmentIndex": "10/72", "startDate": "10/2024", "endDate": "09/2030"},
        ],
    },
    "servidor_negativo": {
        "baseIR": 1000.00,
        "contrachequeData": {"servidor": "JOAO PEREIRA", "matricula": "2233445", "orgao": "INSS", "competencia": "08/2025"},
        "items": [
            {"description": "34228 - EMPREST BCO PRIVADOS - BANRISUL", "value": 400.00, "bank": "BANRISUL"},
            {"description": "35012 - AMORT CARTAO CREDITO - BMG", "value": 60.00, "bank": "BMG"},
        ],
    },
    "servidor_sem_consignacoes": {
        "baseIR": 2500.00,
        "items": [],
    },
}


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/v1beta/models/{model}:generateContent")
async def generate_content(model: str, request: Request):
    body = await request.json()
    parts = body["contents"][0]["parts"]
    inline = [p["inlineData"] for p in parts if "inlineData" in p]
    if not inline:
        raise HTTPException(status_code=400, detail="no documents")

    persona = base64.b64decode(inline[0]["data"]).decode("utf-8", errors="ignore").strip()
    if persona == "ilegivel":
        return {"candidates": [{"content": {"parts": [{"text": ""}]}}]}
    if persona not in PERSONAS:
        raise HTTPException(status_code=500, detail="model error")

    return {"candidates": [{"content": {"parts": [{"text": json.dumps(PERSONAS[persona])}]}}]}
