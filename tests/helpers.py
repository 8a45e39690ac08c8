"""
Shared test fixtures data: sample CBE PDFs and Telebirr receipt pages
"""

CBE_LINES = [
    "Commercial Bank of Ethiopia",
    "VAT Invoice / Customer Receipt",
    "Payer ABEBE KEBEDE",
    "Account 1****4521",
    "Receiver ETHIO TRADING PLC",
    "Account 1****8067",
    "Payment Date & Time 10/14/2025, 3:25:41 PM",
    "Reference No. (VAT Invoice No) FT25287ABC12",
    "Reason / Type of service done via Mobile",
    "Transferred Amount 1,500.00 ETB",
    "Commission or Service Charge 5.00 ETB",
    "15% VAT on Commission 0.75 ETB",
    "Total amount debited from customers account 1,505.75",
    "Amount in Word ETB One Thousand Five Hundred Five and Seventy Five Cents",
]


def make_pdf(lines):
    """
    Build a minimal one-page PDF with one text line per entry.

    Helvetica, so pdfminer needs no embedded font program.
    """
    def esc(s):
        return s.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")

    ops = ["BT", "/F1 10 Tf", "14 TL", "40 760 Td"]
    for line in lines:
        ops.append(f"({esc(line)}) Tj T*")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, 1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1, xref_at
    )
    return bytes(out)


TELEBIRR_ROWS = {
    "payerName":           ("የከፋይ ስም/Payer Name", "Abebe Kebede Tesfaye"),
    "payerTelebirrNumber": ("የከፋይ ቴሌብር ቁ./Payer telebirr no.", "2519****1234"),
    "creditedPartyName":   ("የገንዘብ ተቀባይ ስም/Credited Party name", "Ethio Trading PLC"),
    "paymentType":         ("የክፍያ ምክንያት/Payment Reason", "Transfer Money"),
    "bankAccountNumber":   ("የባንክ አካውንት ቁጥር/Bank account number", "1000123456789"),
}


def make_telebirr_html(
    values=None,
    receipt_number="CJK1234XYZ",
    payment_date="14-10-2025 15:25:41",
    total_paid="1,500.00 Birr",
):
    """Telebirr receipt page shaped like the live one: nested layout tables."""
    values = dict(values or {})
    info_rows = "\n".join(
        f'<tr><td class="tdLabel">{label}</td><td class="tdValue">{values.get(name, default)}</td></tr>'
        for name, (label, default) in TELEBIRR_ROWS.items()
    )
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>telebirr receipt</title></head>
<body>
<table class="outer">
  <tr><td>
    <table class="info">
      {info_rows}
    </table>
  </td></tr>
  <tr><td>
    <table class="receipt">
      <tr>
        <td class="receipttableTd2">የክፍያ ቁጥር/Invoice No.</td>
        <td class="receipttableTd2">የክፍያ ቀን/Payment date</td>
        <td class="receipttableTd2">የተከፈለው መጠን/Settled Amount</td>
      </tr>
      <tr>
        <td class="receipttableTd">{receipt_number}</td>
        <td class="receipttableTd">{payment_date}</td>
        <td class="receipttableTd">{total_paid}</td>
      </tr>
      <tr>
        <td class="receipttableTd">ጠቅላላ የተከፈለ/Total Paid Amount</td>
        <td class="receipttableTd">{total_paid}</td>
      </tr>
    </table>
  </td></tr>
</table>
</body>
</html>"""


TELEBIRR_INVALID_HTML = """<html><body>
<div class="error">This request is not correct</div>
</body></html>"""
