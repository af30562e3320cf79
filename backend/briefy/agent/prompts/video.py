VIDEO_EXTRACTION_PROMPT = """Analise este vídeo e extraia informações detalhadas sobre seu conteúdo. Forneça uma análise completa incluindo:

## CONTEÚDO DO VÍDEO
- Descrição completa do que é mostrado no vídeo
- Cenários, ambientes e contextos visuais
- Pessoas, objetos e elementos presentes
- Ações e interações ocorrendo

## CONTEÚDO AUDITIVO
- Fala/transcrição completa (se houver)
- Diálogos e conversas

## ANÁLISE TÉCNICA
- Requisitos funcionais identificados
- Processos de negócio mostrados
- Fluxos de trabalho demonstrados
- Integrações de sistemas sugeridas

## TÓPICOS E CATEGORIAS
- Principais tópicos abordados
- Tecnologias mencionadas
- Palavras-chave relevantes

Responda em formato JSON estruturado:
{
  "extractedText": "Descrição completa do vídeo em texto",
  "transcription": "Transcrição completa de áudio/fala",
  "analysis": {
    "keyTopics": ["tópico1", "tópico2"],
    "requirements": ["requisito1", "requisito2"],
    "technicalDetails": ["detalhe1", "detalhe2"],
    "businessContext": ["contexto1", "contexto2"]
  }
}"""
