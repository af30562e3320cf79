ANALYSIS_PROMPT = """Você é um analista de sistemas sênior. Analise todo o material fornecido (documentos e contexto extraído de vídeos)
e produza uma análise consolidada do projeto.

Responda APENAS com um JSON válido nesta estrutura:
{
  "executiveSummary": {
    "projectOverview": "Resumo do projeto",
    "mainObjectives": ["objetivo1", "objetivo2"]
  },
  "functionalRequirements": [
    {"id": "RF01", "title": "Título", "description": "Descrição", "priority": "high|medium|low"}
  ],
  "nonFunctionalRequirements": [
    {"id": "RNF01", "title": "Título", "description": "Descrição", "category": "performance|security|usability|reliability"}
  ],
  "systemArchitecture": {
    "components": ["componente1"],
    "integrations": ["integração1"],
    "dataFlows": ["fluxo1"]
  },
  "technicalRecommendations": {
    "technologies": ["tecnologia1"],
    "architecturePatterns": ["padrão1"],
    "bestPractices": ["prática1"]
  },
  "businessImpact": {
    "businessValue": "Valor para o negócio",
    "impactLevel": "high|medium|low"
  }
}"""
