"""Operations: health probes and structured logging."""
