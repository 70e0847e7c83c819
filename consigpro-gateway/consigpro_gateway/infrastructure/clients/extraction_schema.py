"""Fixed instruction and response schema sent to the extraction model"""

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "baseIR": {
            "type": "NUMBER",
            "description": (
                "O valor numérico encontrado EXATAMENTE no campo 'VALOR BASE PENSÃO I.R.' ou "
                "'BASE CÁLCULO DO I.R.' no rodapé do contracheque. Retorne apenas o número."
            ),
        },
        "contrachequeData": {
            "type": "OBJECT",
            "properties": {
                "servidor": {"type": "STRING", "description": "Nome completo do servidor/pensionista"},
                "matricula": {"type": "STRING", "description": "Matrícula SIAPE (ex: 1160815/2774526)"},
                "orgao": {"type": "STRING", "description": "Órgão pagador"},
                "competencia": {"type": "STRING", "description": "Mês/Ano de referência"},
            },
        },
        "items": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "description": {
                        "type": "STRING",
                        "description": "Descrição/Rubrica (ex: 34228 - EMPREST BCO PRIVADOS - PAN)",
                    },
                    "value": {"type": "NUMBER", "description": "Valor da Parcela (R$)"},
                    "bank": {"type": "STRING", "description": "Nome do banco (ex: PAN, BANRISUL, BMG)"},
                    "contract": {"type": "STRING", "description": "Número do Contrato"},
                    "installmentIndex": {"type": "STRING", "description": "Parcela (ex: 44/96)"},
                    "startDate": {"type": "STRING", "description": "Início (MM/AAAA)"},
                    "endDate": {"type": "STRING", "description": "Fim (MM/AAAA)"},
                },
                "required": ["description", "value"],
            },
            "description": "Lista de todas as consignações vigentes encontradas no extrato.",
        },
    },
    "required": ["baseIR", "items"],
}

EXTRACTION_PROMPT = """
Analise os documentos SIAPE anexados (Contracheque e Extrato de Consignações).

REGRAS DE EXTRAÇÃO:
1. Localize no CONTRACHEQUE o campo "VALOR BASE PENSÃO I.R." (se for pensionista) OU "BASE CÁLCULO DO I.R." (se não for). Este valor é a base para todos os cálculos.
2. No EXTRATO DE CONSIGNAÇÕES, identifique a tabela "Demonstrativo de uso da margem".
3. Extraia cada linha individualmente, capturando:
   - Número do Contrato
   - Rubrica completa (ex: EMPREST BCO PRIVADOS...)
   - Banco (extraído da rubrica)
   - Parcela (ex: 44/96)
   - Valor da Parcela (R$)
   - Datas de Início e Fim.

Certifique-se de não pular nenhum empréstimo ou amortização de cartão.
"""
