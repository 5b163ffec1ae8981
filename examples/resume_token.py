"""Resume tokens — persisting and restoring upload progress.

Demonstrates:
- Deriving tokens as chunks are acknowledged
- Serializing a token to JSON and restoring it
- Rejecting invalid serialized tokens
"""

from __future__ import annotations

from cloudfs import ByteRange, ResumeToken, TokenSerializationError

CHUNK = 256 * 1024

if __name__ == "__main__":
    token = ResumeToken("https://upload.example/session/abc", selector="name,size")
    print(f"Started: {token.uploaded_bytes} bytes uploaded")

    for chunk_index in range(3):
        token = token.with_progress(ByteRange(0, (chunk_index + 1) * CHUNK - 1))
        print(f"Acknowledged: {token.uploaded_bytes} bytes")

    saved = token.to_json()
    print(f"\nSaved token: {saved}")

    restored = ResumeToken.from_json(saved)
    print(f"Restored token resumes at byte {restored.uploaded_bytes} (same token: {restored == token})")

    try:
        ResumeToken.from_dict({"type": 0, "uploadUri": "https://upload.example/session/abc", "done": True})
    except TokenSerializationError as exc:
        print(f"\nTokenSerializationError: {exc}")
