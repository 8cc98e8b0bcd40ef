from html import escape

from ..enum.rental_enum import TemplateType

CONTRACT_TITLES = {
    TemplateType.residential.value: "CONTRATO DE LOCAÇÃO RESIDENCIAL",
    TemplateType.commercial.value: "CONTRATO DE LOCAÇÃO COMERCIAL",
}

PRINT_STYLES = """
    @media print {
      body { font-size: 12pt; margin: 0; padding: 0; }
      .no-print { display: none; }
      @page { margin: 0; size: auto; }
      .content { padding: 0; margin: 0; }
    }

    body {
      font-family: Arial, Helvetica, sans-serif;
      line-height: 1.5;
      margin: 0 auto;
      padding: 0;
      color: #000;
      max-width: 210mm;
    }

    .controls {
      position: fixed;
      bottom: 20px;
      right: 20px;
      background: #0066cc;
      padding: 10px;
      border-radius: 5px;
      box-shadow: 0 2px 5px rgba(0,0,0,0.2);
      z-index: 1000;
    }

    .controls button {
      background: white;
      color: #0066cc;
      border: none;
      padding: 8px 15px;
      margin: 0 5px;
      border-radius: 3px;
      cursor: pointer;
      font-weight: bold;
    }

    .content {
      padding: 1.5cm;
      background-color: white;
      box-sizing: border-box;
      position: relative;
      min-height: 29.7cm;
    }

    h1, h2, h3 { text-align: center; margin: 15px 0; }

    .text-center { text-align: center; }
    .text-right { text-align: right; }
    .text-justify { text-align: justify; }

    .bold { font-weight: bold; }
    .italic { font-style: italic; }
    .underline { text-decoration: underline; }

    .color-yellow { color: #ffff00; background-color: #333; }
    .color-red { color: #ff0000; }
    .color-blue { color: #0000ff; }
    .color-green { color: #00ff00; background-color: #333; }
"""

# editor output carries ql-* classes, map them onto the print classes above
CLASS_NORMALIZATION_SCRIPT = """
    document.addEventListener('DOMContentLoaded', function() {
      var rules = [
        ['.ql-align-center', 'text-center'],
        ['.ql-align-right', 'text-right'],
        ['.ql-align-justify', 'text-justify'],
        ['.ql-bold, strong, b', 'bold'],
        ['.ql-italic, em, i', 'italic'],
        ['.ql-underline, u', 'underline'],
        ['.ql-color-yellow, [style*="color: yellow"], [style*="color:#ffff00"]', 'color-yellow'],
        ['.ql-color-red, [style*="color: red"], [style*="color:#ff0000"]', 'color-red'],
        ['.ql-color-blue, [style*="color: blue"], [style*="color:#0000ff"]', 'color-blue'],
        ['.ql-color-green, [style*="color: green"], [style*="color:#00ff00"]', 'color-green']
      ];
      rules.forEach(function(rule) {
        document.querySelectorAll(rule[0]).forEach(function(el) {
          el.classList.add(rule[1]);
        });
      });
    });
"""

PREVIEW_STYLES = """
    body { font-family: Arial, sans-serif; line-height: 1.6; margin: 30px; color: #333; }
    .container {
      max-width: 800px;
      margin: 0 auto;
      padding: 20px;
      border: 1px solid #ddd;
      box-shadow: 0 0 10px rgba(0,0,0,0.1);
    }
    h1, h2 { text-align: center; }
    .toolbar {
      display: flex;
      justify-content: space-between;
      position: sticky;
      top: 0;
      background: #f8f8f8;
      padding: 10px;
      border-bottom: 1px solid #ddd;
      margin-bottom: 20px;
    }
    .btn {
      padding: 8px 16px;
      cursor: pointer;
      background-color: #4CAF50;
      color: white;
      border: none;
      border-radius: 4px;
    }
    .btn:hover { background-color: #45a049; }
    .pre-content { white-space: pre-wrap; word-wrap: break-word; }
"""


def render_contract_html(content: str, title: str) -> str:
    """Print-ready document. The processed template is embedded as is."""
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>
  <style>{PRINT_STYLES}</style>
</head>
<body>
  <div class="controls no-print">
    <button onclick="window.print()">Imprimir</button>
    <button onclick="window.close()">Fechar</button>
  </div>

  <div class="content">
{content}
  </div>

  <script>{CLASS_NORMALIZATION_SCRIPT}</script>
</body>
</html>
"""


def render_contract_preview_html(content: str, title: str, contract_id: int,
                                 type: str, template_id: int = None) -> str:
    pdf_url = f"/api/contracts/{contract_id}/pdf/{type}"
    if template_id:
        pdf_url += f"?template_id={template_id}"
    heading = CONTRACT_TITLES.get(type, CONTRACT_TITLES["residential"])
    body = content.replace("\n", "<br>")

    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>
  <style>{PREVIEW_STYLES}</style>
</head>
<body>
  <div class="toolbar">
    <button class="btn" onclick="window.print()">Imprimir</button>
    <button class="btn" onclick="window.location.href='{pdf_url}'">Baixar PDF</button>
    <button class="btn" onclick="window.history.back()">Voltar</button>
  </div>
  <div class="container">
    <h1>{heading}</h1>
    <div class="pre-content">
{body}
    </div>
  </div>
</body>
</html>
"""
